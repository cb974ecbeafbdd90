"""Tests for attribute lookup and typed getters."""

from datetime import date

import pytest

from gradevue.data.attributes import Attributes, parse_date
from gradevue.data.errors import MissingAttribute, TypedParseFailure
from gradevue.data.events import StartElement


def _attrs(**values) -> Attributes:
    return Attributes.from_event(StartElement("X", tuple(values.items())))


class TestLookup:
    def test_last_duplicate_wins(self):
        attrs = Attributes([("Score", "1"), ("Score", "2")])
        assert attrs.required("Score") == "2"

    def test_required_missing(self):
        with pytest.raises(MissingAttribute) as exc:
            _attrs().required("Title")
        assert exc.value.name == "Title"

    def test_required_allows_empty_string(self):
        assert _attrs(Notes="").required("Notes") == ""


class TestTypedGetters:
    def test_integer(self):
        assert _attrs(Period="3").integer("Period") == 3

    def test_integer_failure_names_attribute(self):
        with pytest.raises(TypedParseFailure) as exc:
            _attrs(Period="3rd").integer("Period")
        assert exc.value.kind == "int"
        assert exc.value.attribute == "Period"
        assert exc.value.raw_value == "3rd"
        assert isinstance(exc.value.__cause__, ValueError)

    def test_integer_rejects_padding_and_underscores(self):
        for raw in (" 3 ", "1_000", "3.0"):
            with pytest.raises(TypedParseFailure) as exc:
                _attrs(Period=raw).integer("Period")
            assert exc.value.raw_value == raw

    def test_integer_signed(self):
        assert _attrs(Period="-2").integer("Period") == -2

    def test_floating_rejects_non_finite(self):
        for raw in ("NaN", "inf", "-Infinity"):
            with pytest.raises(TypedParseFailure) as exc:
                _attrs(CalculatedScoreRaw=raw).floating("CalculatedScoreRaw")
            assert exc.value.kind == "float"

    def test_integer_missing_is_missing_attribute(self):
        with pytest.raises(MissingAttribute):
            _attrs().integer("Period")

    def test_floating(self):
        assert _attrs(CalValue="3.5").floating("CalValue") == 3.5

    def test_floating_failure(self):
        with pytest.raises(TypedParseFailure) as exc:
            _attrs(CalValue="N/A").floating("CalValue")
        assert exc.value.kind == "float"

    def test_boolean(self):
        assert _attrs(HasDropBox="true").boolean("HasDropBox") is True
        assert _attrs(HasDropBox="false").boolean("HasDropBox") is False

    def test_boolean_failure(self):
        with pytest.raises(TypedParseFailure) as exc:
            _attrs(HasDropBox="yes").boolean("HasDropBox")
        assert exc.value.kind == "bool"

    def test_date_without_padding(self):
        assert _attrs(Date="9/3/2024").date("Date") == date(2024, 9, 3)

    def test_date_two_digit_parts(self):
        assert _attrs(Date="12/25/2024").date("Date") == date(2024, 12, 25)

    def test_date_failure(self):
        with pytest.raises(TypedParseFailure) as exc:
            _attrs(Date="2024-09-03").date("Date")
        assert exc.value.kind == "date"
        assert exc.value.raw_value == "2024-09-03"


class TestOptionalFloat:
    def test_value(self):
        assert _attrs(Proficiency="2.5").optional_float("Proficiency") == 2.5

    def test_blank_is_none(self):
        assert _attrs(Proficiency="").optional_float("Proficiency") is None

    def test_absent_is_none(self):
        assert _attrs().optional_float("Proficiency") is None

    def test_nan_is_none(self):
        assert _attrs(Proficiency="NaN").optional_float("Proficiency") is None


def test_parse_date():
    assert parse_date("1/31/2025") == date(2025, 1, 31)
