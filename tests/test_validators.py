"""Tests for client-side validators."""

from datetime import datetime

import pytest

from controller.validators import (
    ValidationError,
    check_lengths,
    require_fields,
    to_server_timestamp,
    validate_file,
)
from model.fields import ordinances, services
from model.resources import SERVICES
from model.schema import ModalMode

NOW = datetime(2026, 10, 19, 9, 5, 7)


class TestRequireFields:
    """Test require_fields()."""

    def test_reports_each_missing_field(self):
        draft = {"serviceId": "SRV-1", "serviceTitle": "  "}
        errors = require_fields(draft, SERVICES.required_fields(ModalMode.CREATE))
        assert errors[0] == "Service Title is required."
        assert "Department is required." in errors
        assert len(errors) == 6

    def test_all_present(self, day_care_service):
        assert require_fields(day_care_service, SERVICES.required_fields(ModalMode.EDIT)) == []


class TestCheckLengths:
    """Test check_lengths()."""

    def test_over_limit(self):
        errors = check_lengths({"serviceRequirements": "x" * 151}, SERVICES.fields)
        assert errors == ["Service Requirements must be at most 150 characters."]

    def test_at_limit(self):
        assert check_lengths({"serviceRequirements": "x" * 150}, SERVICES.fields) == []


class TestValidateFile:
    """Test validate_file()."""

    def test_accepts_pdf(self, pdf_file):
        mime, size = validate_file(pdf_file, ordinances.FILE)
        assert mime == "application/pdf"
        assert size > 0

    def test_rejects_image_for_pdf_field(self, png_file):
        with pytest.raises(ValidationError, match="Allowed: PDF"):
            validate_file(png_file, ordinances.FILE)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="File not found"):
            validate_file(tmp_path / "nope.png", services.FILE)

    def test_messages_attribute(self, tmp_path):
        with pytest.raises(ValidationError) as exc:
            validate_file(tmp_path / "nope.png", services.FILE)
        assert len(exc.value.messages) == 1


class TestToServerTimestamp:
    """Test date conversion to the server's DATETIME format."""

    def test_iso_date_gets_current_time(self):
        assert to_server_timestamp("2026-10-01", NOW) == "2026-10-01 09:05:07"

    def test_long_month_name(self):
        assert to_server_timestamp("October 1, 2026", NOW) == "2026-10-01 09:05:07"

    def test_short_month_name(self):
        assert to_server_timestamp("Oct 1, 2026", NOW) == "2026-10-01 09:05:07"

    def test_empty_means_now(self):
        assert to_server_timestamp("", NOW) == "2026-10-19 09:05:07"

    def test_already_server_format(self):
        assert to_server_timestamp("2025-01-02 03:04:05", NOW) == "2025-01-02 03:04:05"

    def test_garbage(self):
        with pytest.raises(ValidationError, match="Invalid date: next tuesday"):
            to_server_timestamp("next tuesday", NOW)
