"""
Unit tests for the shared request helpers: id parsing, required fields,
query flags and response envelopes.
"""

import pytest

from core import envelope
from core.errors import ValidationError
from core.params import is_valid_id, parse_id, query_flag, require_fields


class TestIdParsing:
    """Numeric ids are digits only and >= 1."""

    @pytest.mark.parametrize("raw", ["1", "42", " 7 ", 3])
    def test_valid_ids(self, raw):
        assert is_valid_id(raw)

    @pytest.mark.parametrize("raw", ["0", "-1", "abc", "1.5", "", None, "12a"])
    def test_invalid_ids(self, raw):
        assert not is_valid_id(raw)

    def test_parse_id_returns_int(self):
        assert parse_id(" 12 ", "baby ID") == 12

    def test_parse_id_default_message(self):
        with pytest.raises(ValidationError, match="Invalid baby ID format"):
            parse_id("abc", "baby ID")

    def test_parse_id_custom_message(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_id("0", "entry ID", "Invalid entry ID provided")
        assert exc_info.value.message == "Invalid entry ID provided"
        assert exc_info.value.status_code == 400


class TestRequiredFields:
    def test_lists_every_missing_field(self):
        with pytest.raises(ValidationError) as exc_info:
            require_fields({"meal": "Breakfast", "time": ""}, ["meal", "time", "type"])
        assert exc_info.value.message == "Missing required parameters: time, type"

    def test_zero_is_present(self):
        require_fields({"amount": 0}, ["amount"])


class TestQueryFlag:
    """Absent flags default to true; only an explicit "false" disables."""

    def test_absent_is_true(self):
        assert query_flag(None) is True

    def test_false_is_false(self):
        assert query_flag("false") is False
        assert query_flag(" FALSE ") is False

    def test_other_values_are_true(self):
        assert query_flag("true") is True
        assert query_flag("") is True


class TestEnvelope:
    def test_ok_merges_payload(self):
        assert envelope.ok(data=[1]) == {"status": "ok", "data": [1]}

    def test_error_shape(self):
        assert envelope.error(404, "Not found") == {
            "status": "error",
            "error": {"code": 404, "message": "Not found"},
        }

    def test_bare_error_shape(self):
        assert envelope.bare_error("Journal entry not found") == {
            "error": {"message": "Journal entry not found"}
        }
