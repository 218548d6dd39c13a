"""Required-field validation for account entities.

Fields are declared required with ``Annotated[str, Required()]``. The marker
survives in the pydantic field metadata, so the required set of any entity
class can be discovered by reflection and checked before a write.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

REQUIRED_CODE = "required"


class Required:
    """Annotation marker for fields that must hold a non-empty value."""

    def __repr__(self) -> str:
        return "Required()"


class FieldError(BaseModel):
    """A single field-level validation failure."""

    field: str = Field(description="Name of the offending field")
    code: str = Field(default=REQUIRED_CODE, description="Machine-readable error code")

    @property
    def message(self) -> str:
        return f"The {self.field} field is required."


class ValidationResult(BaseModel):
    """Outcome of validating an account: success or a list of field errors."""

    errors: list[FieldError] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors

    @property
    def fields(self) -> list[str]:
        return [error.field for error in self.errors]

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    @classmethod
    def failed(cls, errors: list[FieldError]) -> ValidationResult:
        return cls(errors=errors)


class AccountValidationError(ValueError):
    """Raised when an invalid account reaches the persistence boundary."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(error.message for error in result.errors)
        super().__init__(f"Account validation failed: {messages}")


def required_fields(model_cls: type[BaseModel]) -> list[str]:
    """Return the names of fields annotated ``Required``, in declaration order."""
    return [
        name
        for name, field_info in model_cls.model_fields.items()
        if any(isinstance(meta, Required) for meta in field_info.metadata)
    ]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate_account(account: BaseModel) -> ValidationResult:
    """Check every required field of ``account``.

    A field fails when it is None, empty, or whitespace only.
    """
    errors = [
        FieldError(field=name)
        for name in required_fields(type(account))
        if _is_blank(getattr(account, name, None))
    ]
    if errors:
        return ValidationResult.failed(errors)
    return ValidationResult.success()


def ensure_valid(account: BaseModel) -> None:
    """Raise ``AccountValidationError`` unless ``account`` validates."""
    result = validate_account(account)
    if not result.succeeded:
        raise AccountValidationError(result)
