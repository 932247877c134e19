"""Conversion settings and their JSON persistence."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from ..create import CreateOptions
from ..dom import Element

__all__ = ["ConversionSettings", "SettingsStore", "DEFAULT_SETTINGS_PATH"]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".richtext"
DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_SETTINGS_VERSION = 1
_ENV_OVERRIDES: Mapping[str, str] = {
    "RICHTEXT_MULTILINE_TAG": "multiline_tag",
    "RICHTEXT_BOGUS_ATTRIBUTE": "bogus_attribute",
    "RICHTEXT_FILTERED_CHARACTERS": "filtered_characters",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "RICHTEXT_MARKDOWN_BREAKS": "markdown_breaks",
}
_TRUE_VALUES = {"1", "true", "yes", "on"}
# Editors mark temporary nodes with this value to have them dropped entirely.
_REMOVE_MARKER = "all"


@dataclass(slots=True)
class ConversionSettings:
    """How markup produced by an editing host is cleaned during conversion."""

    multiline_tag: str | None = None
    bogus_attribute: str = "data-mce-bogus"
    removed_attribute_prefixes: tuple[str, ...] = ("data-mce-",)
    filtered_characters: str = "\ufeff"
    markdown_breaks: bool = True

    def to_options(self) -> CreateOptions:
        """Return converter hooks implementing these settings."""

        bogus = self.bogus_attribute
        prefixes = tuple(self.removed_attribute_prefixes)
        filtered = self.filtered_characters
        table = str.maketrans("", "", filtered) if filtered else None

        def remove_node_match(node: Element) -> bool:
            return bool(bogus) and node.get(bogus) == _REMOVE_MARKER

        def unwrap_node_match(node: Element) -> bool:
            return bool(bogus) and bool(node.get(bogus))

        def remove_attribute_match(name: str) -> bool:
            return any(name.startswith(prefix) for prefix in prefixes)

        def filter_string(text: str) -> str:
            return text.translate(table) if table else text

        return CreateOptions(
            remove_node_match=remove_node_match,
            unwrap_node_match=unwrap_node_match,
            filter_string=filter_string,
            remove_attribute_match=remove_attribute_match if prefixes else None,
        )


class SettingsStore:
    """Persistence adapter for :class:`ConversionSettings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> ConversionSettings:
        """Load settings from disk, then apply runtime and environment overrides."""

        payload = self._read_payload()
        settings = ConversionSettings()
        if payload:
            data = _filter_fields(payload)
            prefixes = data.get("removed_attribute_prefixes")
            if isinstance(prefixes, (list, tuple)):
                data["removed_attribute_prefixes"] = tuple(str(prefix) for prefix in prefixes)
            try:
                settings = ConversionSettings(**data)
            except TypeError as exc:
                LOGGER.warning("Settings payload contained unexpected data: %s", exc)
                settings = ConversionSettings()
        if overrides:
            settings = self._apply_overrides(settings, overrides, source="runtime")
        return self._apply_env_overrides(settings)

    def save(self, settings: ConversionSettings) -> Path:
        """Persist settings with an atomic file replace."""

        data: Dict[str, Any] = asdict(settings)
        data["removed_attribute_prefixes"] = list(settings.removed_attribute_prefixes)
        data["version"] = _SETTINGS_VERSION
        body = json.dumps(data, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not contain an object", self._path)
            return {}
        return payload

    def _apply_overrides(
        self,
        settings: ConversionSettings,
        overrides: Mapping[str, Any],
        *,
        source: str,
    ) -> ConversionSettings:
        allowed = {field.name for field in fields(ConversionSettings)}
        filtered = {key: value for key, value in overrides.items() if key in allowed and value is not None}
        if "removed_attribute_prefixes" in filtered:
            filtered["removed_attribute_prefixes"] = tuple(filtered["removed_attribute_prefixes"])
        if filtered:
            LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
            settings = replace(settings, **filtered)
        return settings

    def _apply_env_overrides(self, settings: ConversionSettings) -> ConversionSettings:
        overrides: Dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value.strip().lower() in _TRUE_VALUES
        if overrides:
            settings = self._apply_overrides(settings, overrides, source="environment")
        return settings


def _filter_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    allowed = {field.name for field in fields(ConversionSettings)}
    return {key: value for key, value in payload.items() if key in allowed}
