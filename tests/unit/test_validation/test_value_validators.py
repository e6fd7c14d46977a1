"""
Unit tests for value validators.
"""

import pytest

from cbtail.validation import (
    ValidationError,
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
    validate_project_name,
)


@pytest.mark.unit
class TestValidateProjectName:

    @pytest.mark.parametrize("name", ["my-project", "build_01", "Ab"])
    def test_valid_names(self, name):
        assert validate_project_name(name) == name

    @pytest.mark.parametrize("name", ["", None, "a", "-leading", "has space", "x" * 256])
    def test_invalid_names(self, name):
        with pytest.raises(ValidationError):
            validate_project_name(name, field_name="--project-name")


@pytest.mark.unit
class TestNumericValidators:

    def test_float_in_range(self):
        assert validate_positive_float("2.5", min_value=0.1) == 2.5

    def test_float_below_minimum(self):
        with pytest.raises(ValidationError, match="interval must be >= 0.1"):
            validate_positive_float(0.0, min_value=0.1, field_name="interval")

    def test_float_rejects_bool(self):
        with pytest.raises(ValidationError):
            validate_positive_float(True)

    def test_integer_above_maximum(self):
        with pytest.raises(ValidationError, match="must be <= 10"):
            validate_positive_integer(11, max_value=10)

    def test_integer_not_a_number(self):
        with pytest.raises(ValidationError, match="valid integer"):
            validate_positive_integer("many")


@pytest.mark.unit
def test_enum_choice():
    assert validate_enum_choice("PLAINTEXT", ["PLAINTEXT", "PARAMETER_STORE"]) == "PLAINTEXT"
    with pytest.raises(ValidationError, match="must be one of"):
        validate_enum_choice("OTHER", ["PLAINTEXT"], field_name="type")
