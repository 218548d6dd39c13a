"""User profile management CLI commands."""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from sqlalchemy.exc import IntegrityError

from src.accounts.core.services.database import AccountsDbContext, StorageOptions
from src.accounts.core.validation import AccountValidationError
from src.accounts.entities.core.user_profile import UserProfile

console = Console()

accounts_app = typer.Typer(help="👥 User profile management commands")


@accounts_app.callback()
def accounts_callback(
    ctx: typer.Context,
    database_url: str | None = typer.Option(
        None,
        "--database-url",
        envvar="DATABASE_URL",
        help="Connection string; defaults to the database in config.yaml",
    ),
) -> None:
    ctx.obj = database_url


def open_context(ctx: typer.Context) -> AccountsDbContext:
    """Open a storage context for the selected database, creating tables if needed."""
    if ctx.obj:
        context = AccountsDbContext(StorageOptions(url=ctx.obj))
    else:
        context = AccountsDbContext.from_config()
    try:
        context.ensure_created()
    except Exception:
        context.dispose()
        raise
    return context


@accounts_app.command("init-db")
def init_db(ctx: typer.Context) -> None:
    """🗄️ Create the user profile tables."""
    with open_context(ctx) as context:
        console.print(f"[green]✅ Database ready at {context.options.safe_url}[/green]")


@accounts_app.command("create")
def create_account(
    ctx: typer.Context,
    user_name: str = typer.Option(..., "--user-name", "-u", help="Login name"),
    first_name: str = typer.Option("", "--first-name", "-f", help="First name"),
    last_name: str = typer.Option("", "--last-name", "-l", help="Last name"),
    email: str | None = typer.Option(None, "--email", "-e", help="Email address"),
) -> None:
    """➕ Register a new user profile."""
    profile = UserProfile(
        user_name=user_name, first_name=first_name, last_name=last_name, email=email
    )

    with open_context(ctx) as context:
        with context.session_scope() as session:
            taken = context.users(session).get_by_user_name(user_name) is not None
        if taken:
            console.print(f"[red]❌ User name '{user_name}' is already taken[/red]")
            raise typer.Exit(1)

        try:
            with context.session_scope() as session:
                context.users(session).create(profile)
        except AccountValidationError as e:
            for error in e.result.errors:
                console.print(f"[red]❌ {error.message}[/red]")
            raise typer.Exit(1) from None
        except IntegrityError:
            console.print(f"[red]❌ Could not store user '{user_name}'[/red]")
            raise typer.Exit(1) from None

    console.print(f"[green]✅ Created {profile.full_name} ({profile.id})[/green]")


@accounts_app.command("list")
def list_accounts(
    ctx: typer.Context,
    limit: int = typer.Option(20, help="Maximum number of profiles to show"),
) -> None:
    """📋 List stored user profiles."""
    with open_context(ctx) as context, context.session_scope() as session:
        profiles = context.users(session).list_all(limit=limit)

    if not profiles:
        console.print("[yellow]No user profiles found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Username", style="cyan")
    table.add_column("First Name", style="blue")
    table.add_column("Last Name", style="blue")
    table.add_column("Email", style="green")
    for profile in profiles:
        table.add_row(
            profile.id,
            profile.user_name,
            profile.first_name,
            profile.last_name,
            profile.email or "",
        )
    console.print(table)


@accounts_app.command("show")
def show_account(ctx: typer.Context, profile_id: str) -> None:
    """🔎 Show one user profile."""
    with open_context(ctx) as context, context.session_scope() as session:
        profile = context.users(session).get(profile_id)

    if profile is None:
        console.print(f"[red]❌ No user profile with id {profile_id}[/red]")
        raise typer.Exit(1)

    console.print(
        Panel.fit(
            f"[bold]{profile.full_name}[/bold]\n"
            f"Username: {profile.user_name}\n"
            f"Email: {profile.email or '-'}\n"
            f"Phone: {profile.phone_number or '-'}\n"
            f"Two-factor: {'on' if profile.two_factor_enabled else 'off'}",
            title=profile.id,
            border_style="cyan",
        )
    )


@accounts_app.command("delete")
def delete_account(ctx: typer.Context, profile_id: str) -> None:
    """🗑️ Delete a user profile."""
    with open_context(ctx) as context, context.session_scope() as session:
        deleted = context.users(session).delete(profile_id)

    if not deleted:
        console.print(f"[red]❌ No user profile with id {profile_id}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✅ Deleted {profile_id}[/green]")
