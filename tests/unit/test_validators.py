"""
Unit tests for field validators.

Includes property-based testing with hypothesis for validators.
"""

import datetime as dt

import pytest
from hypothesis import given
from hypothesis import strategies as st

from syncboard.core.models import CATEGORIES
from syncboard.core.validators import (
    ChoiceValidator,
    DateValidator,
    FieldValidationError,
    RequiredFieldValidator,
    TextValidator,
)


class TestRequiredFieldValidator:
    """Tests for RequiredFieldValidator"""

    def test_valid_required_field(self):
        validator = RequiredFieldValidator("title")
        fields = {"title": "Hiking"}
        validator.validate(fields["title"], fields)  # Should not raise

    def test_missing_field_raises_error(self):
        validator = RequiredFieldValidator("title")
        fields = {"body": "text"}

        with pytest.raises(FieldValidationError) as exc_info:
            validator.validate(fields.get("title"), fields)

        assert exc_info.value.field_name == "title"
        assert "missing" in exc_info.value.message.lower()

    def test_null_value_raises_error(self):
        validator = RequiredFieldValidator("title")
        fields = {"title": None}

        with pytest.raises(FieldValidationError) as exc_info:
            validator.validate(fields["title"], fields)

        assert "null" in str(exc_info.value).lower()

    @pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
    def test_blank_string_raises_error(self, blank):
        validator = RequiredFieldValidator("body")
        fields = {"body": blank}

        with pytest.raises(FieldValidationError):
            validator.validate(fields["body"], fields)

    def test_blank_string_allowed_when_configured(self):
        validator = RequiredFieldValidator("body", {"allow_empty_string": True})
        validator.validate("", {"body": ""})

    @given(st.text(min_size=1).filter(lambda s: s.strip() != ""))
    def test_property_non_blank_text_passes(self, value):
        """Property test: any non-blank string satisfies the rule"""
        validator = RequiredFieldValidator("title")
        validator.validate(value, {"title": value})


class TestTextValidator:
    """Tests for TextValidator"""

    @pytest.mark.parametrize("value", [123, 4.5, ["a"], {"a": 1}, True])
    def test_non_string_raises_error(self, value):
        validator = TextValidator("title")

        with pytest.raises(FieldValidationError) as exc_info:
            validator.validate(value, {"title": value})

        assert exc_info.value.rule_name == "text"
        assert "Expected text" in exc_info.value.message

    def test_none_and_blank_left_to_required_rule(self):
        validator = TextValidator("title")
        validator.validate(None, {"title": None})
        validator.validate("", {"title": ""})

    def test_max_length(self):
        validator = TextValidator("title", {"max_length": 3})
        validator.validate("abc", {"title": "abc"})
        with pytest.raises(FieldValidationError, match="maximum length"):
            validator.validate("abcd", {"title": "abcd"})

    @given(st.text())
    def test_property_any_string_passes(self, value):
        TextValidator("body").validate(value, {"body": value})


class TestChoiceValidator:
    """Tests for ChoiceValidator"""

    def test_allowed_choice_passes(self):
        validator = ChoiceValidator("category", {"choices": CATEGORIES})
        validator.validate("Sports", {"category": "Sports"})

    def test_unknown_choice_raises_error(self):
        validator = ChoiceValidator("category", {"choices": CATEGORIES})

        with pytest.raises(FieldValidationError) as exc_info:
            validator.validate("Gardening", {"category": "Gardening"})

        assert exc_info.value.rule_name == "choice"
        assert "Gardening" in exc_info.value.message

    def test_choice_is_case_sensitive(self):
        validator = ChoiceValidator("category", {"choices": CATEGORIES})
        with pytest.raises(FieldValidationError):
            validator.validate("sports", {"category": "sports"})

    def test_none_and_blank_left_to_required_rule(self):
        validator = ChoiceValidator("category", {"choices": CATEGORIES})
        validator.validate(None, {"category": None})
        validator.validate("", {"category": ""})

    def test_missing_choices_parameter(self):
        with pytest.raises(ValueError, match="choices"):
            ChoiceValidator("category")

    @given(st.sampled_from(CATEGORIES))
    def test_property_every_category_passes(self, value):
        validator = ChoiceValidator("category", {"choices": CATEGORIES})
        validator.validate(value, {"category": value})


class TestDateValidator:
    """Tests for DateValidator"""

    @pytest.mark.parametrize("value", [
        "2024-01-31",
        "2024-01-31T23:59:59.000Z",
        dt.date(2024, 1, 31),
        dt.datetime(2024, 1, 31, 10, 0),
    ])
    def test_accepted_shapes(self, value):
        validator = DateValidator("date")
        validator.validate(value, {"date": value})
        assert validator.clean(value) == dt.date(2024, 1, 31)

    @pytest.mark.parametrize("value", ["yesterday", "2024-13-01", "31/01/2024"])
    def test_unparseable_string_raises_error(self, value):
        validator = DateValidator("date")

        with pytest.raises(FieldValidationError) as exc_info:
            validator.validate(value, {"date": value})

        assert "parse" in exc_info.value.message.lower()

    def test_strict_mode_rejects_strings(self):
        validator = DateValidator("date", {"coerce": False})
        with pytest.raises(FieldValidationError):
            validator.validate("2024-01-31", {"date": "2024-01-31"})

    def test_non_string_non_date_rejected(self):
        validator = DateValidator("date")
        with pytest.raises(FieldValidationError, match="Expected a date"):
            validator.validate(20240131, {"date": 20240131})

    def test_none_skipped(self):
        """Test None values are skipped (handled by required_field)"""
        DateValidator("date").validate(None, {"date": None})

    @given(st.dates())
    def test_property_iso_dates_round_trip(self, value):
        """Property test: every ISO formatted date is accepted and cleaned back"""
        validator = DateValidator("date")
        text = value.isoformat()
        validator.validate(text, {"date": text})
        assert validator.clean(text) == value
