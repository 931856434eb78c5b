"""Field Aliases — verifies payload key resolution, blank handling and parsing.

Tests:
    - snake_case beats camelCase beats extra aliases, whichever is present first
    - Explicit null is present; absent keys are never returned
    - Required checks treat whitespace-only text as blank
    - Non-nullable fields are reported only when explicitly null
    - Parser failures surface as ValidationError naming the field
"""

import pytest

from aquatour.core.coercion import parse_int
from aquatour.core.errors import ValidationError
from aquatour.core.field_aliases import (
    FieldSpec, blank_required, is_blank, missing_required, null_fields, parse_values,
    require_fields, resolve_present, to_camel_case, to_columns,
)

SPECS = (
    FieldSpec("first_name", required=True),
    FieldSpec("provider_type", aliases=("type",)),
    FieldSpec("satisfaction", parse=parse_int),
    FieldSpec("password", column="password_digest"),
)


def test_to_camel_case():
    assert to_camel_case("first_name") == "firstName"
    assert to_camel_case("created_by_user_id") == "createdByUserId"
    assert to_camel_case("email") == "email"


def test_keys_are_name_camel_then_aliases():
    assert SPECS[1].keys == ("provider_type", "providerType", "type")
    assert FieldSpec("email").keys == ("email",)


def test_snake_case_wins_over_camel_case():
    present = resolve_present({"firstName": "B", "first_name": "A"}, SPECS)
    assert present == {"first_name": "A"}


def test_camel_case_and_alias_accepted():
    present = resolve_present({"firstName": "B", "type": "hotel"}, SPECS)
    assert present == {"first_name": "B", "provider_type": "hotel"}


def test_explicit_null_is_present():
    assert resolve_present({"provider_type": None}, SPECS) == {"provider_type": None}


def test_absent_fields_are_not_returned():
    assert resolve_present({"unrelated": 1}, SPECS) == {}


@pytest.mark.parametrize("value,blank", [
    (None, True), ("", True), ("  ", True), ("x", False), (0, False), (False, False),
])
def test_is_blank(value, blank):
    assert is_blank(value) is blank


def test_missing_required_counts_absent_and_blank():
    assert missing_required({}, SPECS) == ["first_name"]
    assert missing_required({"first_name": "  "}, SPECS) == ["first_name"]
    assert missing_required({"first_name": "Ana"}, SPECS) == []


def test_blank_required_ignores_absent_fields():
    assert blank_required({}, SPECS) == []
    assert blank_required({"first_name": ""}, SPECS) == ["first_name"]


def test_null_fields_only_flags_non_nullable():
    specs = (*SPECS, FieldSpec("max_capacity", parse=parse_int, nullable=False))
    assert null_fields({}, specs) == []
    assert null_fields({"max_capacity": 0}, specs) == []
    assert null_fields({"max_capacity": None, "satisfaction": None}, specs) == ["max_capacity"]


def test_require_fields_lists_missing_names():
    with pytest.raises(ValidationError) as exc:
        require_fields({}, SPECS)
    assert exc.value.message == "Missing required fields: first_name"
    assert exc.value.fields == ["first_name"]


def test_parse_values_applies_parser_and_blanks_to_none():
    assert parse_values({"satisfaction": "4"}, SPECS) == {"satisfaction": 4}
    assert parse_values({"satisfaction": " "}, SPECS) == {"satisfaction": None}
    assert parse_values({"first_name": "  Ana "}, SPECS) == {"first_name": "  Ana "}


def test_parse_values_reports_field_on_failure():
    with pytest.raises(ValidationError) as exc:
        parse_values({"satisfaction": "many"}, SPECS)
    assert exc.value.fields == ["satisfaction"]
    assert "satisfaction" in exc.value.message


def test_to_columns_uses_column_override():
    assert to_columns({"password": "h", "first_name": "A"}, SPECS) == {
        "password_digest": "h", "first_name": "A",
    }
