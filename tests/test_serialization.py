"""Tests for JSON payloads."""

from __future__ import annotations

import json

import pytest

from richtext import Format, MultilineRecord, PayloadError, Record, Selection, Value, create_value
from richtext.core.selection import PathSelection
from richtext.serialization import (
    dumps,
    loads,
    record_from_payload,
    record_to_payload,
    validate_payload,
    value_from_payload,
    value_to_payload,
)


def test_value_to_payload_shares_table_entries() -> None:
    em = Format("em")

    payload = value_to_payload(Value("ab", [[em], [em]]))

    assert payload == {
        "version": 1,
        "format_table": [{"type": "em"}],
        "value": {"text": "ab", "formats": [[0], [0]]},
    }


def test_equal_formats_from_different_elements_get_separate_entries() -> None:
    value = create_value("<em>te</em><em>st</em>")

    payload = value_to_payload(value)

    assert payload["format_table"] == [{"type": "em"}, {"type": "em"}]
    assert payload["value"]["formats"] == [[0], [0], [1], [1]]


def test_round_trip_preserves_identity() -> None:
    value = create_value('<em>te</em><em>s<a href="#">t</a></em><img src="x.png">')

    restored = loads(dumps(value))

    assert restored == value
    formats = restored.formats
    assert formats[0][0] is formats[1][0]
    assert formats[1][0] is not formats[2][0]
    assert formats[2][0] is formats[3][0]
    assert formats[4] == [Format("img", {"src": "x.png"}, object=True)]


def test_record_round_trip() -> None:
    record = Record(Value.plain("abc"), Selection(1, 2))

    assert loads(dumps(record)) == record
    assert record_from_payload(record_to_payload(record)) == record


def test_multiline_round_trip() -> None:
    em = Format("em")
    record = MultilineRecord([Value("a", [[em]]), Value("b", [[em]])], PathSelection((0, 1), (1,)))

    restored = loads(dumps(record))

    assert restored == record
    assert restored.value[0].formats[0][0] is restored.value[1].formats[0][0]


def test_dumps_keeps_non_ascii_text() -> None:
    assert "\U0001F352" in dumps(Value.plain("\U0001F352"))


def test_loads_rejects_invalid_json() -> None:
    with pytest.raises(PayloadError) as excinfo:
        loads("{not json")

    assert excinfo.value.reason == "invalid_payload"


def test_validate_payload_reports_schema_errors_with_paths() -> None:
    payload = {"version": 1, "format_table": [{"type": ""}], "value": {"text": "a", "formats": [None]}}

    errors = validate_payload(payload)

    assert len(errors) == 1
    assert errors[0].startswith("format_table[0].type:")


def test_validate_payload_requires_exactly_one_body() -> None:
    base = {"version": 1, "format_table": []}
    value = {"text": "", "formats": []}

    assert validate_payload({**base, "value": value}) == []
    assert validate_payload(base)
    assert validate_payload({**base, "value": value, "blocks": [value]})


def test_validate_payload_checks_table_indexes() -> None:
    payload = {"version": 1, "format_table": [], "value": {"text": "a", "formats": [[0]]}}

    assert validate_payload(payload) == ["format 0 at slot 0 of value 0 is not in the table"]


def test_validate_payload_checks_selection_kind() -> None:
    single = {"version": 1, "format_table": [], "value": {"text": "", "formats": []}, "selection": {"start": [0]}}
    multi = {"version": 1, "format_table": [], "blocks": [], "selection": {"end": 0}}

    assert validate_payload(single) == ["selection.start: single-block selections use offsets"]
    assert validate_payload(multi) == ["selection.end: multiline selections use paths"]


def test_value_from_payload_rejects_blocks() -> None:
    payload = json.loads(dumps(MultilineRecord([Value.plain("a")])))

    with pytest.raises(PayloadError):
        value_from_payload(payload)


def test_invalid_payload_raises_with_all_errors() -> None:
    with pytest.raises(PayloadError) as excinfo:
        value_from_payload({"version": 2, "format_table": [], "value": {"text": "", "formats": []}})

    assert excinfo.value.errors
    assert excinfo.value.details()["reason"] == "invalid_payload"


def test_validate_payload_paths_for_nested_and_root_errors() -> None:
    nested = {
        "version": 1,
        "format_table": [],
        "blocks": [{"text": "", "formats": []}, {"text": "a", "formats": ["x"]}],
    }
    missing_table = {"version": 1, "value": {"text": "", "formats": []}}

    assert [error.split(":")[0] for error in validate_payload(nested)] == ["blocks[1].formats[0]"]
    assert validate_payload(missing_table) == ["'format_table' is a required property"]
