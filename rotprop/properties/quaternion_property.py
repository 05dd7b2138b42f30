"""QuaternionProperty - quaternion edited as four float children."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from rotprop import log
from rotprop.properties.property import FloatProperty, Property
from rotprop.util import as_quat, identity_quat, qnormalize

COMPONENTS = ("x", "y", "z", "w")


def format_float(value: float) -> str:
    text = f"{value:.5g}"
    if text == "-0":
        text = "0"
    return text


class QuaternionProperty(Property):
    """
    Quaternion [x, y, z, w] shown as "x; y; z; w".

    The stored value is what the user entered and is not normalized here;
    consumers normalize when they need a rotation.
    """

    def __init__(
        self,
        name: str = "quaternion",
        value=None,
        description: str = "order: x, y, z, w",
        parent: Optional[Property] = None,
    ):
        super().__init__(name, None, description, parent)
        self._quaternion = identity_quat() if value is None else as_quat(value)

        self._components: list[FloatProperty] = []
        for comp, v in zip(COMPONENTS, self._quaternion):
            prop = FloatProperty(comp, float(v), f"{comp} component", self)
            prop.changed += self._update_from_children
            self._components.append(prop)

    def get_quaternion(self) -> np.ndarray:
        return self._quaternion.copy()

    def set_quaternion(self, q) -> None:
        q = as_quat(q)
        if np.allclose(q, self._quaternion, rtol=0.0, atol=1e-12):
            return

        self.about_to_change.emit(self)
        self._quaternion = q
        for prop, v in zip(self._components, q):
            with prop.changed.blocked():
                prop.set_value(float(v))
        self.changed.emit(self)

    def _update_from_children(self, _prop: Property) -> None:
        q = np.array([p.get_float() for p in self._components], dtype=float)
        if np.array_equal(q, self._quaternion):
            return
        self.about_to_change.emit(self)
        self._quaternion = q
        self.changed.emit(self)

    def get_value(self) -> str:
        return "; ".join(format_float(v) for v in self._quaternion)

    def set_value(self, value: Any) -> bool:
        """Parse "x; y; z; w". Rejects anything that is not a usable rotation."""
        q = parse_quaternion(str(value))
        if q is None:
            return False
        self.set_quaternion(q)
        return True

    def set_read_only(self, read_only: bool) -> None:
        super().set_read_only(read_only)
        for prop in self._components:
            prop.set_read_only(read_only)

    def load(self, config) -> None:
        values = [config.map_get_float(c) for c in COMPONENTS]
        if any(v is None for v in values):
            return
        self.set_quaternion(values)

    def save(self, config) -> None:
        for comp, v in zip(COMPONENTS, self._quaternion):
            config.map_set_value(comp, float(v))


def parse_quaternion(text: str) -> Optional[np.ndarray]:
    parts = [p.strip() for p in text.split(";")]
    if len(parts) != 4:
        return None
    try:
        q = as_quat([float(p) for p in parts])
        qnormalize(q)
    except ValueError as e:
        log.debug(f"[QuaternionProperty] rejected '{text}': {e}")
        return None
    return q
