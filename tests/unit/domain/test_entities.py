"""
Name: Domain Entity Tests

Responsibilities:
  - Validate UserProfile row parsing and serialization
  - Validate report literal matching and date parsing
  - Ensure Session public view never leaks tokens
"""

from datetime import date

import pytest
from sst_console.domain.entities import (
    LABEL_CLOSURE,
    LABEL_RESULT,
    LABEL_VERIFICATION_DATE,
    ClosureStatus,
    Report,
    ReportResult,
    Role,
    Session,
    UpdateUserData,
    UserProfile,
    parse_report_date,
)

pytestmark = pytest.mark.unit


class TestRole:
    def test_parse_known_value(self):
        assert Role.parse("nurse") is Role.NURSE

    def test_parse_unknown_uses_default(self):
        assert Role.parse("superuser", Role.EMPLOYEE) is Role.EMPLOYEE

    def test_parse_unknown_without_default_raises(self):
        with pytest.raises(ValueError):
            Role.parse("superuser")


class TestUserProfile:
    def test_from_row_defaults(self):
        profile = UserProfile.from_row({"id": "abc", "role": None})

        assert profile.role is Role.EMPLOYEE
        assert profile.is_active is True
        assert profile.name == ""
        assert profile.email is None

    def test_from_row_inactive_only_when_explicit_false(self):
        assert UserProfile.from_row({"id": "a", "is_active": False}).is_active is False
        assert UserProfile.from_row({"id": "a", "is_active": None}).is_active is True

    def test_to_dict_exposes_role_value_and_status(self, make_user):
        data = make_user(role=Role.ADMIN, is_active=False).to_dict()

        assert data["role"] == "admin"
        assert data["status"] == "inactive"


class TestUpdateUserData:
    def test_provided_fields_keeps_explicit_empty_strings(self):
        data = UpdateUserData(department="", is_active=False)

        assert data.provided_fields() == ["department", "is_active"]

    def test_nothing_provided(self):
        assert UpdateUserData().provided_fields() == []


class TestSession:
    def test_public_dict_has_no_tokens(self, make_user):
        session = Session(
            access_token="at",
            refresh_token="rt",
            user_id="u-1",
            email="a@acme.test",
            profile=make_user(role=Role.ADMIN),
        )

        public = session.to_public_dict()

        assert "access_token" not in public
        assert "refresh_token" not in public
        assert public["profile"]["role"] == "admin"
        assert session.role is Role.ADMIN


class TestReportLiterals:
    def test_exact_acceptable_literal(self):
        assert ReportResult.from_raw("ACEPTABLE 可接受") is ReportResult.ACCEPTABLE

    @pytest.mark.parametrize(
        "raw", ["aceptable 可接受", "ACEPTABLE", "ACEPTABLE 可接受 ", None, ""]
    )
    def test_any_other_value_is_not_acceptable(self, raw):
        assert ReportResult.from_raw(raw) is ReportResult.NOT_ACCEPTABLE

    def test_closure_exact_match(self):
        assert ClosureStatus.from_raw("CERRADO") is ClosureStatus.CLOSED
        assert ClosureStatus.from_raw("Cerrado") is ClosureStatus.PENDING
        assert ClosureStatus.from_raw("ABIERTO") is ClosureStatus.PENDING


class TestParseReportDate:
    def test_date_with_time_suffix(self):
        assert parse_report_date("05/03/2024 14:30:00") == date(2024, 3, 5)

    def test_date_only(self):
        assert parse_report_date("31/12/2023") == date(2023, 12, 31)

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "2024-03-05",
            "32/01/2024",
            "aa/bb/cccc",
            "05/03",
            "01/01/99999999999999999999 10:00",
            None,
            20240305,
        ],
    )
    def test_malformed_returns_none(self, raw):
        assert parse_report_date(raw) is None


class TestReport:
    def test_from_wire_maps_labels(self, make_report_row):
        report = Report.from_wire(make_report_row("R-9"))

        assert report.id == "R-9"
        assert report.is_acceptable
        assert report.is_closed
        assert report.verification_date == date(2024, 3, 5)
        assert report.pdf_link == "https://files.test/R-9.pdf"

    def test_from_wire_keeps_raw_values(self, make_report_row):
        row = make_report_row(
            **{
                LABEL_RESULT: "NO ACEPTABLE",
                LABEL_CLOSURE: "EN PROCESO",
                LABEL_VERIFICATION_DATE: "sin fecha",
            }
        )

        report = Report.from_wire(row)

        assert report.result is ReportResult.NOT_ACCEPTABLE
        assert report.closure is ClosureStatus.PENDING
        assert report.verification_date is None
        assert report.to_wire() == row

    def test_to_dict_uses_iso_date(self, make_report_row):
        data = Report.from_wire(make_report_row()).to_dict()

        assert data["verification_date"] == "2024-03-05"
        assert data["result"] == "acceptable"
        assert data["closure"] == "closed"
