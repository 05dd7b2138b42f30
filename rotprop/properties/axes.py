"""
Euler axis-order specification.

A spec string names three rotation axes and the frame they refer to:

    [s|r]<a><b><c>     a, b, c in {x, y, z}, no two consecutive equal

's' composes the elemental rotations about the static world axes, 'r' (the
default when no prefix is given) about the body axes as rotated so far.
"rpy" is shorthand for "sxyz" with the axes labelled roll, pitch, yaw.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

AXIS_CHARS = "xyz"
XYZ_NAMES = ("x", "y", "z")
RPY_NAMES = ("roll", "pitch", "yaw")


class Frame(enum.Enum):
    FIXED = "s"
    ROTATING = "r"


class AxesError(enum.Enum):
    EMPTY = "empty"
    WRONG_LENGTH = "wrong_length"
    BAD_CHAR = "bad_char"
    REPEATED_AXIS = "repeated_axis"


@dataclass(frozen=True)
class AxesParseError:
    reason: AxesError
    char: Optional[str] = None

    @property
    def message(self) -> str:
        if self.reason is AxesError.BAD_CHAR:
            return f"invalid axis char: {self.char} (only xyz allowed)"
        if self.reason is AxesError.REPEATED_AXIS:
            return "consecutive axes need to be different"
        return "invalid axes string: expecting 3 axis specs from x,y,z"


class InvalidAxesError(ValueError):
    """Raised when an axes spec string cannot be parsed."""

    def __init__(self, error: AxesParseError):
        super().__init__(error.message)
        self.error = error

    @property
    def reason(self) -> AxesError:
        return self.error.reason


@dataclass(frozen=True)
class AxesSpec:
    """
    Parsed axis order.

    axes   – indices 0=x, 1=y, 2=z in application order
    frame  – Frame.FIXED or Frame.ROTATING
    names  – label per position, not part of equality
    """
    axes: tuple[int, int, int]
    frame: Frame = Frame.ROTATING
    names: tuple[str, str, str] = field(default=None, compare=False)

    def __post_init__(self):
        if self.names is None:
            object.__setattr__(self, "names", tuple(XYZ_NAMES[a] for a in self.axes))

    @property
    def fixed(self) -> bool:
        return self.frame is Frame.FIXED

    @property
    def letters(self) -> str:
        return "".join(AXIS_CHARS[a] for a in self.axes)

    @property
    def scipy_seq(self) -> str:
        """Sequence for scipy Rotation: lower case is extrinsic, upper case intrinsic."""
        return self.letters if self.fixed else self.letters.upper()

    def __str__(self) -> str:
        return self.frame.value + self.letters

    @classmethod
    def parse(cls, text: str) -> "AxesSpec":
        result = parse_axes(text)
        if isinstance(result, AxesParseError):
            raise InvalidAxesError(result)
        return result


def parse_axes(text: Optional[str]) -> Union[AxesSpec, AxesParseError]:
    """Parse an axes spec string. Returns the spec or the reason it was rejected."""
    if not text:
        return AxesParseError(AxesError.EMPTY)

    names_by_axis = XYZ_NAMES
    if text == "rpy":
        text = "sxyz"
        names_by_axis = RPY_NAMES

    frame = Frame.ROTATING
    if text[0] in ("s", "r"):
        frame = Frame(text[0])
        text = text[1:]

    if len(text) != 3:
        return AxesParseError(AxesError.WRONG_LENGTH)

    axes: list[int] = []
    for ch in text:
        idx = AXIS_CHARS.find(ch)
        if idx < 0:
            return AxesParseError(AxesError.BAD_CHAR, ch)
        if axes and axes[-1] == idx:
            return AxesParseError(AxesError.REPEATED_AXIS)
        axes.append(idx)

    return AxesSpec(
        axes=tuple(axes),
        frame=frame,
        names=tuple(names_by_axis[a] for a in axes),
    )
