"""
EulerProperty - a rotation edited as three Euler angles.

The property owns the canonical quaternion. The three child FloatProperty
nodes hold the angles in degrees; their names follow the current axes
(x/y/z, or roll/pitch/yaw for "rpy").

Composition for axes (a0, a1, a2) and angles (e0, e1, e2):

    rotating frame:  R = Rot(a0, e0) * Rot(a1, e1) * Rot(a2, e2)
    fixed frame:     R = Rot(a2, e2) * Rot(a1, e1) * Rot(a0, e0)

Decomposition is closed form (scipy). When the middle angle is +-90 degrees
(gimbal lock) only the sum or difference of the outer angles is determined;
the returned triplet is valid but not unique.
"""

from __future__ import annotations

import math
import re
import warnings
from typing import Any, Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from rotprop import log
from rotprop.core.event import Event
from rotprop.properties.axes import AxesSpec, InvalidAxesError
from rotprop.properties.property import FloatProperty, Property
from rotprop.util import axis_quat, identity_quat, qis_approx, qmul, qnormalize

DESCRIPTION = (
    "Angles specified in degrees.\n"
    "Choose axes with spec like xyz, zxz, or rpy.\n"
    "Composition w.r.t. the static or rotating frame\n"
    "is selected by prefixing with 's' or 'r'."
)

_AXES_PREFIX = re.compile(r"\s*([a-z]+)\s*:?")


def compose(angles: Sequence[float], spec: AxesSpec) -> np.ndarray:
    """Quaternion [x, y, z, w] for angles (radians) applied in the order of spec."""
    q0, q1, q2 = (axis_quat(axis, float(a)) for axis, a in zip(spec.axes, angles))
    if spec.fixed:
        return qmul(qmul(q2, q1), q0)
    return qmul(qmul(q0, q1), q2)


def decompose(q, spec: AxesSpec) -> np.ndarray:
    """Euler angles (radians) of q, ordered to match spec.axes."""
    rot = Rotation.from_quat(qnormalize(q))
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        if spec.fixed:
            # Rot(c)*Rot(b)*Rot(a) is the intrinsic sequence c, b, a.
            reversed_seq = spec.scipy_seq[::-1].upper()
            angles = rot.as_euler(reversed_seq)[::-1]
        else:
            angles = rot.as_euler(spec.scipy_seq)
    if caught:
        log.debug(f"[EulerProperty] gimbal lock while decomposing for {spec}")
    return np.array(angles, dtype=float)


def format_angle(degrees: float) -> str:
    """One decimal, trailing ".0" dropped: 45.0 -> "45", -12.25 -> "-12.2"."""
    text = f"{round(degrees, 1) + 0.0:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    if text == "-0":
        text = "0"
    return text


class EulerProperty(Property):
    """Rotation property edited through three Euler angles."""

    def __init__(
        self,
        name: str = "Euler angles",
        value=None,
        description: str = DESCRIPTION,
        parent: Optional[Property] = None,
        axes: str = "rpy",
    ):
        super().__init__(name, "", description, parent)

        self.quaternion_changed: Event[np.ndarray] = Event()

        self._quaternion = identity_quat() if value is None else qnormalize(value)
        self._ignore_child_updates = False
        self._axes_string = ""
        self._axes: Optional[AxesSpec] = None

        self._euler = [
            FloatProperty("", 0.0, "rotation angle about first axis", self),
            FloatProperty("", 0.0, "rotation angle about second axis", self),
            FloatProperty("", 0.0, "rotation angle about third axis", self),
        ]
        self.set_axes(axes)

        for prop in self._euler:
            prop.about_to_change += self._emit_about_to_change
            prop.changed += self._update_from_children

    # --- accessors ---

    def get_quaternion(self) -> np.ndarray:
        return self._quaternion.copy()

    def get_euler_angles(self) -> np.ndarray:
        """Current angles in radians, as displayed."""
        return np.array([math.radians(p.get_float()) for p in self._euler])

    def get_axes(self) -> str:
        return self._axes_string

    def get_axes_spec(self) -> AxesSpec:
        return self._axes

    def angle_properties(self) -> list[FloatProperty]:
        return list(self._euler)

    # --- setters ---

    def set_quaternion(self, q) -> None:
        q = qnormalize(q)
        if qis_approx(self._quaternion, q):
            return
        self._apply(decompose(q, self._axes), q)

    def set_euler_angles(self, e0: float, e1: float, e2: float, normalize: bool = False) -> None:
        """
        Set angles in radians.

        normalize=True replaces the angles by the canonical decomposition of
        the resulting rotation. normalize=False keeps them verbatim, which is
        what the per-axis editors need while the user is typing.
        """
        euler = (float(e0), float(e1), float(e2))
        q = compose(euler, self._axes)
        if normalize:
            self.set_quaternion(q)
        else:
            self._apply(euler, q)

    def set_axes(self, axes_spec: str) -> None:
        """Switch axis order. Raises InvalidAxesError and keeps the old axes on bad input."""
        if axes_spec == self._axes_string:
            return
        spec = AxesSpec.parse(axes_spec)
        q = self._quaternion
        self._apply(decompose(q, spec), q, (axes_spec, spec))

    def set_value(self, value: Any) -> bool:
        """
        Parse "<axes>", "<axes>: a; b; c" or "a; b; c" (degrees).

        Nothing is applied unless the whole string is valid.
        """
        s = str(value)
        spec_text = None
        spec = self._axes
        m = _AXES_PREFIX.match(s)
        if m:
            spec_text = m.group(1)
            try:
                spec = AxesSpec.parse(spec_text)
            except InvalidAxesError as e:
                log.debug(f"[EulerProperty] rejected axes '{spec_text}': {e}")
                return False
            s = s[m.end():]

        euler = None
        if s.strip():
            parts = s.split(";")
            if len(parts) < 3:
                return False
            try:
                euler = [math.radians(float(p)) for p in parts[:3]]
            except ValueError:
                return False
            if not all(math.isfinite(e) for e in euler):
                return False
        elif spec_text is None:
            return False

        axes = None
        if spec_text is not None and spec_text != self._axes_string:
            axes = (spec_text, spec)
        if euler is not None:
            self._apply(euler, compose(euler, spec), axes)
        elif axes is not None:
            self._apply(decompose(self._quaternion, spec), self._quaternion, axes)
        return True

    def get_value(self) -> str:
        return self._value

    def set_read_only(self, read_only: bool) -> None:
        super().set_read_only(read_only)
        for prop in self._euler:
            prop.set_read_only(read_only)

    # --- persistence ---

    def load(self, config) -> None:
        axes = config.map_get_string("axes")
        euler = [config.map_get_float(key) for key in ("e1", "e2", "e3")]
        if axes is None or any(e is None for e in euler):
            log.debug(f"[EulerProperty] '{self.name}': incomplete config, nothing to load")
            return
        try:
            spec = AxesSpec.parse(axes)
        except InvalidAxesError as e:
            log.warn(f"[EulerProperty] '{self.name}': ignoring stored axes '{axes}': {e}")
            return
        # One normalized update instead of one per field
        q = qnormalize(compose([math.radians(e) for e in euler], spec))
        commit = None if axes == self._axes_string else (axes, spec)
        self._apply(decompose(q, spec), q, commit)

    def save(self, config) -> None:
        config.map_set_value("axes", self._axes_string)
        for key, prop in zip(("e1", "e2", "e3"), self._euler):
            config.map_set_value(key, prop.get_float())

    # --- internals ---

    def _apply(
        self,
        euler: Sequence[float],
        q: np.ndarray,
        axes: Optional[tuple[str, AxesSpec]] = None,
    ) -> None:
        """Commit angles, quaternion and optionally new axes as one change."""
        self.about_to_change.emit(self)

        if axes is not None:
            self._axes_string, self._axes = axes
            for prop, name in zip(self._euler, self._axes.names):
                prop.set_name(name)

        if not self._ignore_child_updates:
            self._ignore_child_updates = True
            try:
                for prop, angle in zip(self._euler, euler):
                    prop.set_value(math.degrees(angle))
            finally:
                self._ignore_child_updates = False

        quaternion_changed = not qis_approx(self._quaternion, q)
        if quaternion_changed:
            self._quaternion = q
        self._update_string()

        if quaternion_changed:
            self.quaternion_changed.emit(q.copy())
        self.changed.emit(self)

    def _update_from_children(self, _prop: Property) -> None:
        if self._ignore_child_updates:
            return
        euler = [math.radians(p.get_float()) for p in self._euler]
        self._ignore_child_updates = True
        try:
            self.set_euler_angles(*euler, normalize=False)
        finally:
            self._ignore_child_updates = False

    def _emit_about_to_change(self, _prop: Property) -> None:
        if self._ignore_child_updates:
            return
        self.about_to_change.emit(self)

    def _update_string(self) -> None:
        angles = "; ".join(format_angle(p.get_float()) for p in self._euler)
        self._value = f"{self._axes_string}: {angles}"
