"""
Property tree nodes.

A Property is a named, editable value in an inspector tree. It owns its
children, notifies `about_to_change` before and `changed` after its value is
replaced, and knows how to persist itself into a Config.

This is the host side of the editor: composite properties such as
EulerProperty and RotationProperty subclass Property and wire their children's
events to their own update logic.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Iterator, Optional

from rotprop.core.event import Event

if TYPE_CHECKING:
    from rotprop.properties.config import Config


class Property:
    """Base node of the property tree."""

    def __init__(
        self,
        name: str = "",
        default_value: Any = None,
        description: str = "",
        parent: Optional["Property"] = None,
    ):
        self._name = name
        self._value = default_value
        self._description = description
        self._read_only = False
        self._parent: Optional[Property] = None
        self._children: list[Property] = []

        self.about_to_change: Event[Property] = Event()
        self.changed: Event[Property] = Event()

        if parent is not None:
            parent.add_child(self)

    # --- tree ---

    @property
    def parent(self) -> Optional["Property"]:
        return self._parent

    @property
    def children(self) -> list["Property"]:
        return list(self._children)

    def __iter__(self) -> Iterator["Property"]:
        return iter(list(self._children))

    def child_count(self) -> int:
        return len(self._children)

    def child_at(self, index: int) -> "Property":
        return self._children[index]

    def child(self, name: str) -> Optional["Property"]:
        """First direct child with the given name, or None."""
        for c in self._children:
            if c.name == name:
                return c
        return None

    def add_child(self, child: "Property", index: int = -1) -> None:
        if child._parent is not None:
            child._parent.remove_child(child)
        child._parent = self
        if index < 0 or index >= len(self._children):
            self._children.append(child)
        else:
            self._children.insert(index, child)

    def remove_child(self, child: "Property") -> None:
        if child in self._children:
            self._children.remove(child)
            child._parent = None

    # --- name / description ---

    @property
    def name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    @property
    def description(self) -> str:
        return self._description

    def set_description(self, description: str) -> None:
        self._description = description

    # --- value ---

    def get_value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> bool:
        """
        Replace the value. Emits about_to_change/changed only if it differs.

        Returns True when the value was accepted (even if unchanged),
        subclasses return False for input they cannot parse.
        """
        if value != self._value:
            self.about_to_change.emit(self)
            self._value = value
            self.changed.emit(self)
        return True

    # --- read only ---

    def is_read_only(self) -> bool:
        return self._read_only

    def set_read_only(self, read_only: bool) -> None:
        self._read_only = bool(read_only)

    # --- persistence ---

    def load(self, config: "Config") -> None:
        """Load own value from "value" and each child from a sub-map of its name."""
        value = config.map_get_value("value")
        if value is not None:
            self.set_value(value)
        for c in self._children:
            sub = config.map_get_child(c.name)
            if sub is not None:
                c.load(sub)

    def save(self, config: "Config") -> None:
        if self._value is not None:
            config.map_set_value("value", self._value)
        for c in self._children:
            c.save(config.map_make_child(c.name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, {self.get_value()!r})"


class FloatProperty(Property):
    """Property holding a float."""

    def __init__(
        self,
        name: str = "",
        default_value: float = 0.0,
        description: str = "",
        parent: Optional[Property] = None,
    ):
        super().__init__(name, float(default_value), description, parent)

    def set_value(self, value: Any) -> bool:
        try:
            value = float(value)
        except (TypeError, ValueError):
            return False
        if not math.isfinite(value):
            return False
        return super().set_value(value)

    def get_float(self) -> float:
        return self._value

    def load(self, config: "Config") -> None:
        value = config.map_get_float("value")
        if value is not None:
            self.set_value(value)


class StringProperty(Property):
    """Property holding a string."""

    def __init__(
        self,
        name: str = "",
        default_value: str = "",
        description: str = "",
        parent: Optional[Property] = None,
    ):
        super().__init__(name, str(default_value), description, parent)

    def set_value(self, value: Any) -> bool:
        return super().set_value("" if value is None else str(value))

    def get_string(self) -> str:
        return self._value
