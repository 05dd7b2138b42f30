"""
Inspector properties for rotations.

- Property, FloatProperty, StringProperty - property tree nodes
- AxesSpec, parse_axes - Euler axis-order specs ("xyz", "szxz", "rpy", ...)
- EulerProperty - rotation as three Euler angles
- QuaternionProperty - rotation as quaternion components
- RotationProperty - both views kept in sync
- Config, QSettingsConfig - persistence
"""

from rotprop.properties.property import Property, FloatProperty, StringProperty
from rotprop.properties.axes import (
    AxesError,
    AxesParseError,
    AxesSpec,
    Frame,
    InvalidAxesError,
    parse_axes,
)
from rotprop.properties.config import Config, QSettingsConfig
from rotprop.properties.euler_property import EulerProperty, compose, decompose
from rotprop.properties.quaternion_property import QuaternionProperty
from rotprop.properties.rotation_property import RotationProperty

__all__ = [
    'Property',
    'FloatProperty',
    'StringProperty',
    'AxesError',
    'AxesParseError',
    'AxesSpec',
    'Frame',
    'InvalidAxesError',
    'parse_axes',
    'Config',
    'QSettingsConfig',
    'EulerProperty',
    'compose',
    'decompose',
    'QuaternionProperty',
    'RotationProperty',
]
