"""
rotprop - редактируемые свойства вращения для инспектора 3D-редактора.

Основные модули:
- properties - дерево свойств, углы Эйлера, кватернион, синхронизация
- editor.widgets - Qt-виджет для RotationProperty
"""

from .properties import (
    AxesSpec,
    EulerProperty,
    InvalidAxesError,
    QuaternionProperty,
    RotationProperty,
)

__version__ = '0.1.0'

__all__ = [
    'AxesSpec',
    'EulerProperty',
    'InvalidAxesError',
    'QuaternionProperty',
    'RotationProperty',
]
