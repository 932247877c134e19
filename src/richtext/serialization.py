"""JSON payloads for values and records that keep format identity.

Slots reference a shared table of format descriptors by index, so two slots
holding the same :class:`Format` instance still hold one instance after a
round trip.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Sequence, Union

from jsonschema import Draft202012Validator

from .core.formats import Format, FormatSlot
from .core.selection import PathSelection, Selection
from .core.value import MultilineRecord, Record, Value
from .errors import PayloadError, UnsupportedValueError

__all__ = [
    "PAYLOAD_SCHEMA",
    "PAYLOAD_VERSION",
    "value_to_payload",
    "value_from_payload",
    "record_to_payload",
    "record_from_payload",
    "validate_payload",
    "dumps",
    "loads",
]

PAYLOAD_VERSION = 1
MAX_SCHEMA_ERRORS = 25

_OFFSET_SCHEMA = {"type": "integer", "minimum": 0}
_PATH_SCHEMA = {"type": "array", "items": _OFFSET_SCHEMA, "minItems": 1, "maxItems": 2}
_VALUE_SCHEMA = {
    "type": "object",
    "properties": {
        "text": {"type": "string"},
        "formats": {
            "type": "array",
            "items": {
                "anyOf": [
                    {"type": "null"},
                    {"type": "array", "items": _OFFSET_SCHEMA, "minItems": 1},
                ]
            },
        },
    },
    "required": ["text", "formats"],
    "additionalProperties": False,
}
PAYLOAD_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "version": {"const": PAYLOAD_VERSION},
        "format_table": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "type": {"type": "string", "minLength": 1},
                    "attributes": {"type": "object", "additionalProperties": {"type": "string"}},
                    "object": {"type": "boolean"},
                },
                "required": ["type"],
                "additionalProperties": False,
            },
        },
        "value": _VALUE_SCHEMA,
        "blocks": {"type": "array", "items": _VALUE_SCHEMA},
        "selection": {
            "type": "object",
            "properties": {
                "start": {"anyOf": [_OFFSET_SCHEMA, _PATH_SCHEMA]},
                "end": {"anyOf": [_OFFSET_SCHEMA, _PATH_SCHEMA]},
            },
            "additionalProperties": False,
        },
    },
    "required": ["version", "format_table"],
    "oneOf": [{"required": ["value"]}, {"required": ["blocks"]}],
    "additionalProperties": False,
}

_VALIDATOR = Draft202012Validator(PAYLOAD_SCHEMA)


class _FormatTable:
    """Assigns one index per distinct format instance."""

    def __init__(self) -> None:
        self._indexes: Dict[int, int] = {}
        self.entries: List[Format] = []

    def index_of(self, format: Format) -> int:
        key = id(format)
        index = self._indexes.get(key)
        if index is None:
            index = len(self.entries)
            self._indexes[key] = index
            self.entries.append(format)
        return index

    def encode_value(self, value: Value) -> Dict[str, Any]:
        return {
            "text": value.text,
            "formats": [None if slot is None else [self.index_of(entry) for entry in slot] for slot in value.formats],
        }

    def to_payload(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self.entries]


def value_to_payload(value: Value) -> Dict[str, Any]:
    """Return a JSON-compatible payload for ``value``."""

    table = _FormatTable()
    encoded = table.encode_value(value)
    return {"version": PAYLOAD_VERSION, "format_table": table.to_payload(), "value": encoded}


def record_to_payload(record: Record | MultilineRecord) -> Dict[str, Any]:
    """Return a JSON-compatible payload for a single-block or multiline record."""

    table = _FormatTable()
    if isinstance(record, MultilineRecord):
        blocks = [table.encode_value(block) for block in record.value]
        return {
            "version": PAYLOAD_VERSION,
            "format_table": table.to_payload(),
            "blocks": blocks,
            "selection": record.selection.to_dict(),
        }
    if isinstance(record, Record):
        encoded = table.encode_value(record.value)
        return {
            "version": PAYLOAD_VERSION,
            "format_table": table.to_payload(),
            "value": encoded,
            "selection": record.selection.to_dict(),
        }
    raise UnsupportedValueError(f"Expected a record, got {type(record).__name__}")


def validate_payload(payload: Any) -> list[str]:
    """Return every schema or consistency problem found in ``payload``."""

    errors: list[str] = []
    for issue in _VALIDATOR.iter_errors(payload):
        # ``json_path`` reads like ``$.format_table[0].type``; drop the root marker.
        path = issue.json_path.removeprefix("$").lstrip(".")
        errors.append(f"{path}: {issue.message}" if path else issue.message)
        if len(errors) >= MAX_SCHEMA_ERRORS:
            errors.append("Too many validation errors; stopping early.")
            return errors
    if errors:
        return errors

    table_size = len(payload["format_table"])
    values = payload["blocks"] if "blocks" in payload else [payload["value"]]
    for block_index, value in enumerate(values):
        for slot_index, slot in enumerate(value["formats"]):
            for entry in slot or ():
                if entry >= table_size:
                    errors.append(f"format {entry} at slot {slot_index} of value {block_index} is not in the table")

    selection = payload.get("selection") or {}
    multiline = "blocks" in payload
    for key, boundary in selection.items():
        if multiline and not isinstance(boundary, list):
            errors.append(f"selection.{key}: multiline selections use paths")
        elif not multiline and isinstance(boundary, list):
            errors.append(f"selection.{key}: single-block selections use offsets")
    return errors


def value_from_payload(payload: Mapping[str, Any]) -> Value:
    """Rebuild a :class:`Value` from :func:`value_to_payload` output."""

    _require_valid(payload)
    if "value" not in payload:
        raise PayloadError("Payload holds blocks, not a single value", errors=("value: missing",))
    table = _decode_table(payload["format_table"])
    return _decode_value(payload["value"], table)


def record_from_payload(payload: Mapping[str, Any]) -> Union[Record, MultilineRecord]:
    """Rebuild a record from :func:`record_to_payload` output."""

    _require_valid(payload)
    table = _decode_table(payload["format_table"])
    selection = payload.get("selection") or {}
    if "blocks" in payload:
        return MultilineRecord(
            value=[_decode_value(block, table) for block in payload["blocks"]],
            selection=PathSelection.from_value(selection),
        )
    return Record(value=_decode_value(payload["value"], table), selection=Selection.from_value(selection))


def dumps(target: Value | Record | MultilineRecord, **kwargs: Any) -> str:
    """Serialize ``target`` to a JSON string."""

    payload = value_to_payload(target) if isinstance(target, Value) else record_to_payload(target)
    return json.dumps(payload, ensure_ascii=False, **kwargs)


def loads(text: str) -> Union[Value, Record, MultilineRecord]:
    """Parse a JSON string produced by :func:`dumps`.

    Payloads without a ``selection`` key come back as bare values.
    """

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PayloadError(f"Payload is not valid JSON: {exc.msg}", errors=(str(exc),)) from exc
    if isinstance(payload, dict) and "value" in payload and "selection" not in payload:
        return value_from_payload(payload)
    return record_from_payload(payload)


def _require_valid(payload: Any) -> None:
    errors = validate_payload(payload)
    if errors:
        raise PayloadError(f"Invalid rich-text payload: {errors[0]}", errors=errors)


def _decode_table(entries: Sequence[Mapping[str, Any]]) -> List[Format]:
    table: List[Format] = []
    for entry in entries:
        attributes = entry.get("attributes")
        table.append(
            Format(
                type=entry["type"],
                attributes=dict(attributes) if attributes is not None else None,
                object=bool(entry.get("object", False)),
            )
        )
    return table


def _decode_value(payload: Mapping[str, Any], table: Sequence[Format]) -> Value:
    formats: List[FormatSlot] = [None if slot is None else [table[index] for index in slot] for slot in payload["formats"]]
    return Value(text=payload["text"], formats=formats)
