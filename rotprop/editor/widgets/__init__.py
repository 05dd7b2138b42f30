"""Editor widgets package."""

from rotprop.editor.widgets.rotation_widget import RotationFieldWidget

__all__ = [
    "RotationFieldWidget",
]
