"""Unit tests for required-field validation."""

from typing import Annotated

import pytest
from pydantic import BaseModel

from src.accounts.core.validation import (
    REQUIRED_CODE,
    AccountValidationError,
    FieldError,
    Required,
    ValidationResult,
    ensure_valid,
    required_fields,
    validate_account,
)
from src.accounts.entities.core.user_profile import UserProfile


class _Shape(BaseModel):
    title: Annotated[str, Required()] = ""
    note: str = ""
    count: Annotated[int | None, Required()] = None


class TestRequiredFields:
    def test_discovers_annotated_fields_in_order(self):
        assert required_fields(_Shape) == ["title", "count"]

    def test_includes_inherited_required_fields(self):
        assert required_fields(UserProfile) == ["user_name", "first_name", "last_name"]


class TestValidateAccount:
    """Validation of user profiles at the persistence boundary."""

    def test_valid_profile_succeeds(self):
        profile = UserProfile(user_name="ada", first_name="Ada", last_name="Lovelace")

        result = validate_account(profile)

        assert result.succeeded
        assert result.errors == []

    def test_missing_first_name_fails(self):
        profile = UserProfile(user_name="ada", first_name="", last_name="Lovelace")

        result = validate_account(profile)

        assert not result.succeeded
        assert result.errors == [FieldError(field="first_name", code=REQUIRED_CODE)]

    def test_missing_last_name_fails(self):
        profile = UserProfile(user_name="ada", first_name="Ada", last_name="")

        result = validate_account(profile)

        assert not result.succeeded
        assert result.fields == ["last_name"]

    def test_default_profile_reports_every_required_field(self):
        result = validate_account(UserProfile())

        assert result.fields == ["user_name", "first_name", "last_name"]
        assert all(error.code == "required" for error in result.errors)

    @pytest.mark.parametrize("blank", ["", " ", "\t\n"])
    def test_whitespace_only_counts_as_missing(self, blank):
        profile = UserProfile(user_name="ada", first_name=blank, last_name="Lovelace")

        assert validate_account(profile).fields == ["first_name"]

    def test_single_character_names_are_enough(self):
        profile = UserProfile(user_name="x", first_name="A", last_name="L")

        assert validate_account(profile).succeeded

    def test_none_fails_for_non_string_fields(self):
        assert validate_account(_Shape(title="t")).fields == ["count"]
        assert validate_account(_Shape(title="t", count=0)).succeeded


class TestValidationResult:
    def test_success_and_failed_constructors(self):
        assert ValidationResult.success().succeeded
        failed = ValidationResult.failed([FieldError(field="first_name")])
        assert not failed.succeeded
        assert failed.fields == ["first_name"]

    def test_error_message_names_the_field(self):
        assert FieldError(field="last_name").message == "The last_name field is required."


class TestEnsureValid:
    def test_passes_valid_profile(self):
        ensure_valid(UserProfile(user_name="ada", first_name="Ada", last_name="Lovelace"))

    def test_raises_with_result(self):
        with pytest.raises(AccountValidationError, match="first_name") as exc_info:
            ensure_valid(UserProfile(user_name="ada", last_name="Lovelace"))

        assert exc_info.value.result.fields == ["first_name"]
        assert isinstance(exc_info.value, ValueError)
