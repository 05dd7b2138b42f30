"""
Inspector widget for RotationProperty.

Layout:
    [ combined string line edit                    ]
    roll [   ]  pitch [   ]  yaw [   ]               (degrees)
    x [   ]  y [   ]  z [   ]  w [   ]               (quaternion)

All edits go through the property's setters; the widget re-reads the property
on every `changed` notification.
"""

from __future__ import annotations

import functools
from typing import Optional

from PyQt6.QtWidgets import (
    QDoubleSpinBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QVBoxLayout,
    QWidget,
)
from PyQt6.QtCore import pyqtSignal

from rotprop.properties.property import Property
from rotprop.properties.rotation_property import RotationProperty


def _make_spinbox(decimals: int, limit: float, step: float) -> QDoubleSpinBox:
    sb = QDoubleSpinBox()
    # valueChanged only on Enter / focus loss
    sb.setKeyboardTracking(False)
    sb.setDecimals(decimals)
    sb.setRange(-limit, limit)
    sb.setSingleStep(step)
    return sb


def _unsubscribe(prop: RotationProperty, handler, *_args) -> None:
    prop.changed -= handler
    prop.euler_property.changed -= handler
    prop.quaternion_property.changed -= handler


class RotationFieldWidget(QWidget):
    """Edits a RotationProperty as a string, as Euler angles and as a quaternion."""

    value_changed = pyqtSignal()

    def __init__(self, prop: RotationProperty, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._prop = prop

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        self._line_edit = QLineEdit()
        self._line_edit.setToolTip(prop.description)
        self._line_edit.editingFinished.connect(self._on_text_edited)
        layout.addWidget(self._line_edit)

        euler_row = QHBoxLayout()
        self._euler_labels: list[QLabel] = []
        self._euler_boxes: list[QDoubleSpinBox] = []
        for i, angle_prop in enumerate(prop.euler_property.angle_properties()):
            label = QLabel()
            sb = _make_spinbox(decimals=2, limit=3600.0, step=1.0)
            sb.setToolTip(angle_prop.description)
            sb.valueChanged.connect(lambda value, idx=i: self._on_euler_edited(idx, value))
            euler_row.addWidget(label)
            euler_row.addWidget(sb)
            self._euler_labels.append(label)
            self._euler_boxes.append(sb)
        layout.addLayout(euler_row)

        quat_row = QHBoxLayout()
        self._quat_boxes: list[QDoubleSpinBox] = []
        for i, comp in enumerate(prop.quaternion_property.children):
            sb = _make_spinbox(decimals=4, limit=1.0, step=0.01)
            sb.valueChanged.connect(lambda value, idx=i: self._on_quat_edited(idx, value))
            quat_row.addWidget(QLabel(comp.name))
            quat_row.addWidget(sb)
            self._quat_boxes.append(sb)
        layout.addLayout(quat_row)

        handler = self._on_property_changed
        prop.changed += handler
        prop.euler_property.changed += handler
        prop.quaternion_property.changed += handler
        # the Python wrapper may outlive the Qt object (e.g. deleted with its parent)
        self.destroyed.connect(functools.partial(_unsubscribe, prop, handler))
        self.set_read_only(prop.is_read_only())
        self.refresh()

    def rotation_property(self) -> RotationProperty:
        return self._prop

    def detach(self) -> None:
        """Stop listening to the property. Also done when the widget is destroyed."""
        _unsubscribe(self._prop, self._on_property_changed)

    def set_read_only(self, read_only: bool) -> None:
        self._prop.set_read_only(read_only)
        self._line_edit.setReadOnly(read_only)
        for sb in (*self._euler_boxes, *self._quat_boxes):
            sb.setReadOnly(read_only)

    def refresh(self) -> None:
        """Copy the property state into the editors without emitting Qt signals."""
        self._line_edit.blockSignals(True)
        self._line_edit.setText(self._prop.get_string())
        self._line_edit.blockSignals(False)

        angles = self._prop.euler_property.angle_properties()
        for label, sb, angle_prop in zip(self._euler_labels, self._euler_boxes, angles):
            label.setText(angle_prop.name)
            sb.blockSignals(True)
            sb.setValue(angle_prop.get_float())
            sb.blockSignals(False)

        q = self._prop.quaternion_property.get_quaternion()
        for sb, v in zip(self._quat_boxes, q):
            sb.blockSignals(True)
            sb.setValue(float(v))
            sb.blockSignals(False)

    def _on_property_changed(self, _prop: Property) -> None:
        self.refresh()

    def _on_text_edited(self) -> None:
        if self._prop.is_read_only():
            return
        text = self._line_edit.text()
        if text == self._prop.get_string():
            return
        if not self._prop.set_value(text):
            # rejected input: show the last valid value again
            self.refresh()
            return
        self.value_changed.emit()

    def _on_euler_edited(self, index: int, value: float) -> None:
        if self._prop.is_read_only():
            return
        self._prop.euler_property.angle_properties()[index].set_value(value)
        self.value_changed.emit()

    def _on_quat_edited(self, index: int, value: float) -> None:
        if self._prop.is_read_only():
            return
        self._prop.quaternion_property.child_at(index).set_value(value)
        self.value_changed.emit()
