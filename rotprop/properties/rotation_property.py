"""
RotationProperty - one rotation, editable as Euler angles or as a quaternion.

Two child views are kept in sync:

    "Euler angles"  EulerProperty       owns the canonical quaternion ("master")
    "quaternion"    QuaternionProperty  synchronized copy

The summary string shows whichever view was edited last.
"""

from __future__ import annotations

import enum
import re
from typing import Any, Optional

import numpy as np

from rotprop import log
from rotprop.properties.euler_property import EulerProperty
from rotprop.properties.property import Property, StringProperty
from rotprop.properties.quaternion_property import QuaternionProperty, parse_quaternion
from rotprop.util import qis_approx, qnormalize

_QUAT_PREFIX = re.compile(r"\s*quat\s*:?", re.IGNORECASE)


class RotationProperty(StringProperty):
    """Rotation with synchronized Euler and quaternion editors."""

    class State(enum.Enum):
        IDLE = "idle"
        UPDATING_FROM_EULER = "updating_from_euler"
        UPDATING_FROM_QUATERNION = "updating_from_quaternion"

    def __init__(
        self,
        name: str = "rotation",
        value=None,
        description: str = "Orientation specification using Euler angles or a quaternion.",
        parent: Optional[Property] = None,
    ):
        super().__init__(name, "", description, parent)
        self._state = RotationProperty.State.IDLE
        self._show_euler_string = True

        self._euler_property = EulerProperty("Euler angles", value, parent=self)
        self._quaternion_property = QuaternionProperty(
            "quaternion", self._euler_property.get_quaternion(), "order: x, y, z, w", self
        )

        self._euler_property.quaternion_changed += self._update_from_euler
        self._euler_property.changed += self._on_euler_changed
        self._quaternion_property.changed += self._update_from_quaternion
        self._update_string()

    @property
    def euler_property(self) -> EulerProperty:
        return self._euler_property

    @property
    def quaternion_property(self) -> QuaternionProperty:
        return self._quaternion_property

    @property
    def state(self) -> "RotationProperty.State":
        return self._state

    @property
    def show_euler_string(self) -> bool:
        return self._show_euler_string

    def get_quaternion(self) -> np.ndarray:
        return self._euler_property.get_quaternion()

    def set_quaternion(self, q) -> None:
        q = qnormalize(q)
        if qis_approx(self.get_quaternion(), q):
            return

        previous = self._state
        self._state = RotationProperty.State.UPDATING_FROM_QUATERNION
        try:
            self._euler_property.set_quaternion(q)
            self._quaternion_property.set_quaternion(q)
        finally:
            self._state = previous
        self._update_string()

    def set_euler_angles(self, e0: float, e1: float, e2: float, normalize: bool = False) -> None:
        self._euler_property.set_euler_angles(e0, e1, e2, normalize)

    def set_axes(self, axes_spec: str) -> None:
        self._euler_property.set_axes(axes_spec)

    def set_value(self, value: Any) -> bool:
        """
        Accept either "quat: x; y; z; w" or any string EulerProperty accepts.

        Returns False and leaves everything unchanged if the text is rejected.
        """
        s = str(value)
        m = _QUAT_PREFIX.match(s)
        if m is None:
            return self._euler_property.set_value(s)

        q = parse_quaternion(s[m.end():])
        if q is None:
            return False
        self._quaternion_property.set_quaternion(q)
        return True

    def _update_from_euler(self, q: np.ndarray) -> None:
        # EulerProperty is the master: the quaternion view always follows it.
        if self._state is not RotationProperty.State.IDLE:
            self._quaternion_property.set_quaternion(q)
            self._update_string()
            return

        self._state = RotationProperty.State.UPDATING_FROM_EULER
        try:
            self._quaternion_property.set_quaternion(q)
        finally:
            self._state = RotationProperty.State.IDLE
        self._show_euler_string = True
        self._update_string()

    def _on_euler_changed(self, _prop: Property) -> None:
        # axis order changes and angle edits that keep the rotation
        if self._show_euler_string:
            self._update_string()

    def _update_from_quaternion(self, _prop: Property) -> None:
        if self._state is not RotationProperty.State.IDLE:
            return

        try:
            q = qnormalize(self._quaternion_property.get_quaternion())
        except ValueError as e:
            log.warn(e, f"[RotationProperty] '{self.name}': ignoring quaternion edit")
            return

        # only update if changes are beyond accuracy range
        if qis_approx(q, self.get_quaternion()):
            return

        self._show_euler_string = False
        self.set_quaternion(q)
        self._update_string()

    def _update_string(self) -> None:
        if self._show_euler_string:
            s = self._euler_property.get_value()
        else:
            s = "quat: " + self._quaternion_property.get_value()
        if self.get_string() != s:
            self.about_to_change.emit(self)
            self._value = s
            self.changed.emit(self)

    def load(self, config) -> None:
        # The Euler form (axes + angles) is the persisted one; it restores both views.
        self._euler_property.load(config)

    def save(self, config) -> None:
        self._euler_property.save(config)

    def set_read_only(self, read_only: bool) -> None:
        super().set_read_only(read_only)
        self._euler_property.set_read_only(read_only)
        self._quaternion_property.set_read_only(read_only)
