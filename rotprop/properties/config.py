"""
Хранилища для сохранения свойств между сессиями.

Config       – дерево вложенных dict, сериализуется в JSON.
QSettingsConfig – то же API поверх QSettings (реестр / .conf / .plist).

Оба предоставляют один набор map_* методов, которым пользуются
Property.load()/save().
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from PyQt6.QtCore import QSettings


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class Config:
    """Map-shaped config node backed by a plain dict."""

    def __init__(self, data: Optional[dict] = None):
        self._data: dict = data if data is not None else {}

    def map_get_value(self, key: str) -> Any:
        value = self._data.get(key)
        if isinstance(value, dict):
            return None
        return value

    def map_get_string(self, key: str) -> Optional[str]:
        value = self.map_get_value(key)
        if isinstance(value, str):
            return value
        return None

    def map_get_float(self, key: str) -> Optional[float]:
        return _to_float(self.map_get_value(key))

    def map_set_value(self, key: str, value: Any) -> None:
        self._data[key] = value

    def map_get_child(self, key: str) -> Optional["Config"]:
        value = self._data.get(key)
        if isinstance(value, dict):
            return Config(value)
        return None

    def map_make_child(self, key: str) -> "Config":
        value = self._data.get(key)
        if not isinstance(value, dict):
            value = {}
            self._data[key] = value
        return Config(value)

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def to_dict(self) -> dict:
        return self._data

    def to_json(self) -> str:
        return json.dumps(self._data, indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "Config":
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("config root must be a JSON object")
        return cls(data)

    def save_file(self, path: Path | str) -> None:
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load_file(cls, path: Path | str) -> "Config":
        return cls.from_json(Path(path).read_text(encoding="utf-8"))


class QSettingsConfig:
    """
    Config node stored in a QSettings group.

    INI/registry backends return strings for numbers, so numeric getters
    convert on read.
    """

    def __init__(self, settings: QSettings, group: str = ""):
        self._settings = settings
        self._group = group.strip("/")

    def _key(self, key: str) -> str:
        return f"{self._group}/{key}" if self._group else key

    def map_get_value(self, key: str) -> Any:
        return self._settings.value(self._key(key), None)

    def map_get_string(self, key: str) -> Optional[str]:
        value = self.map_get_value(key)
        if value is None:
            return None
        return str(value)

    def map_get_float(self, key: str) -> Optional[float]:
        return _to_float(self.map_get_value(key))

    def map_set_value(self, key: str, value: Any) -> None:
        self._settings.setValue(self._key(key), value)

    def map_get_child(self, key: str) -> Optional["QSettingsConfig"]:
        child = QSettingsConfig(self._settings, self._key(key))
        if not child.keys():
            return None
        return child

    def map_make_child(self, key: str) -> "QSettingsConfig":
        return QSettingsConfig(self._settings, self._key(key))

    def keys(self) -> list[str]:
        self._settings.beginGroup(self._group)
        try:
            return list(self._settings.childKeys()) + list(self._settings.childGroups())
        finally:
            self._settings.endGroup()

    def sync(self) -> None:
        """Force write to disk."""
        self._settings.sync()
