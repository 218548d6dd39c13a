"""Main CLI application module."""

import typer

from src.accounts.runtime.log_config import configure_logging

from .account_commands import accounts_app

app = typer.Typer(
    help="🛠️  Accounts CLI - manage stored user profiles",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(accounts_app, name="accounts")


@app.callback()
def main_callback() -> None:
    configure_logging()


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
