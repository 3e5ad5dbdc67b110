"""Camera control values: setters, value descriptions and control records."""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from camcore.types import CameraControlId, KnownCameraControlFlag


def _fmt_float(number: float) -> str:
    """Format a float the way the device layer prints it: no exponent, no trailing ``.0``."""
    number = float(number)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number == 0:
        return "-0" if math.copysign(1.0, number) < 0 else "0"
    if number.is_integer():
        return str(int(number))
    return format(Decimal(repr(number)), "f")


def _fmt_bool(flag: bool) -> str:
    return "true" if flag else "false"


def _hex_list(data: bytes) -> str:
    return "[" + ", ".join(format(byte, "x") for byte in data) + "]"


def _int_list(values: Sequence[int]) -> str:
    return "[" + ", ".join(str(value) for value in values) + "]"


_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}


def _debug_str(text: str) -> str:
    escaped = "".join(
        _ESCAPES.get(ch, ch if ch.isprintable() else f"\\u{{{ord(ch):x}}}") for ch in text
    )
    return f'"{escaped}"'


def _fmod_is_zero(dividend: float, step: float) -> bool:
    """True when ``dividend`` is an exact multiple of ``step`` (truncated remainder)."""
    if not math.isfinite(dividend) or math.isnan(step):
        return False
    return math.fmod(dividend, step) == 0.0


def _float_triple(values: Sequence[float]) -> Tuple[float, float, float]:
    red, green, blue = values
    return (float(red), float(green), float(blue))


def _float_pair(values: Sequence[float]) -> Tuple[float, float]:
    first, second = values
    return (float(first), float(second))


# ---------------------------------------------------------------------------
# Setters
# ---------------------------------------------------------------------------


class ControlValueSetter:
    """A value to write to a camera control."""

    __slots__ = ()


@dataclass(frozen=True)
class NoValue(ControlValueSetter):
    """The absence of a value."""

    def __str__(self) -> str:
        return "Value: None"


@dataclass(frozen=True)
class IntegerValue(ControlValueSetter):
    value: int

    def __str__(self) -> str:
        return f"IntegerValue: {self.value}"


@dataclass(frozen=True)
class FloatValue(ControlValueSetter):
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def __str__(self) -> str:
        return f"FloatValue: {_fmt_float(self.value)}"


@dataclass(frozen=True)
class BooleanValue(ControlValueSetter):
    value: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bool(self.value))

    def __str__(self) -> str:
        return f"BoolValue: {_fmt_bool(self.value)}"


@dataclass(frozen=True)
class StringValue(ControlValueSetter):
    value: str

    def __str__(self) -> str:
        return f"StrValue: {self.value}"


@dataclass(frozen=True)
class BytesValue(ControlValueSetter):
    value: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bytes(self.value))

    def __str__(self) -> str:
        return f"BytesValue: {_hex_list(self.value)}"


@dataclass(frozen=True)
class KeyValue(ControlValueSetter):
    key: int
    value: int

    def __str__(self) -> str:
        return f"KVValue: ({self.key}, {self.value})"


@dataclass(frozen=True)
class PointValue(ControlValueSetter):
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def __str__(self) -> str:
        return f"PointValue: ({_fmt_float(self.x)}, {_fmt_float(self.y)})"


@dataclass(frozen=True)
class EnumValue(ControlValueSetter):
    value: int

    def __str__(self) -> str:
        return f"EnumValue: {self.value}"


@dataclass(frozen=True)
class RGBValue(ControlValueSetter):
    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", float(self.r))
        object.__setattr__(self, "g", float(self.g))
        object.__setattr__(self, "b", float(self.b))

    def __str__(self) -> str:
        return (
            f"RGBValue: ({_fmt_float(self.r)}, {_fmt_float(self.g)}, {_fmt_float(self.b)})"
        )


# ---------------------------------------------------------------------------
# Descriptions
# ---------------------------------------------------------------------------


class ControlValueDescription(abc.ABC):
    """Describes the current value of a control and which values it accepts."""

    __slots__ = ()

    @abc.abstractmethod
    def value(self) -> ControlValueSetter:
        """The current value as a setter."""

    @abc.abstractmethod
    def verify_setter(self, setter: ControlValueSetter) -> bool:
        """Whether ``setter`` is a valid value for this control."""


@dataclass(frozen=True)
class NoneDescription(ControlValueDescription):
    def value(self) -> ControlValueSetter:
        return NoValue()

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        return isinstance(setter, NoValue)

    def __str__(self) -> str:
        return "(None)"


@dataclass(frozen=True)
class IntegerDescription(ControlValueDescription):
    value_: int = field(metadata={"name": "value"})
    default: int
    step: int

    def value(self) -> ControlValueSetter:
        return IntegerValue(self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        if self.step == 0:
            return True
        if not isinstance(setter, IntegerValue):
            return False
        i = setter.value
        return (i + self.default) % self.step == 0 or (i + self.value_) % self.step == 0

    def __str__(self) -> str:
        return f"(Current: {self.value_}, Default: {self.default}, Step: {self.step})"


@dataclass(frozen=True)
class IntegerRangeDescription(ControlValueDescription):
    min: int
    max: int
    value_: int
    step: int
    default: int

    def value(self) -> ControlValueSetter:
        return IntegerValue(self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        if self.step == 0:
            return True
        if not isinstance(setter, IntegerValue):
            return False
        i = setter.value
        on_step = (i + self.default) % self.step == 0 or (i + self.value_) % self.step == 0
        return on_step and self.min <= i <= self.max

    def __str__(self) -> str:
        return (
            f"(Current: {self.value_}, Default: {self.default}, Step: {self.step}, "
            f"Range: ({self.min}, {self.max}))"
        )


@dataclass(frozen=True)
class FloatDescription(ControlValueDescription):
    value_: float
    default: float
    step: float

    def __post_init__(self) -> None:
        for name in ("value_", "default", "step"):
            object.__setattr__(self, name, float(getattr(self, name)))

    def value(self) -> ControlValueSetter:
        return FloatValue(self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        if abs(self.step) == 0.0:
            return True
        if not isinstance(setter, FloatValue):
            return False
        f = setter.value
        return _fmod_is_zero(abs(f - self.default), self.step) or _fmod_is_zero(
            f - self.value_, self.step
        )

    def __str__(self) -> str:
        return (
            f"(Current: {_fmt_float(self.value_)}, Default: {_fmt_float(self.default)}, "
            f"Step: {_fmt_float(self.step)})"
        )


@dataclass(frozen=True)
class FloatRangeDescription(ControlValueDescription):
    min: float
    max: float
    value_: float
    step: float
    default: float

    def __post_init__(self) -> None:
        for name in ("min", "max", "value_", "step", "default"):
            object.__setattr__(self, name, float(getattr(self, name)))

    def value(self) -> ControlValueSetter:
        return FloatValue(self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        if abs(self.step) == 0.0:
            return True
        if not isinstance(setter, FloatValue):
            return False
        f = setter.value
        on_step = _fmod_is_zero(abs(f - self.default), self.step) or _fmod_is_zero(
            f - self.value_, self.step
        )
        return on_step and f >= self.min and f <= self.max

    def __str__(self) -> str:
        return (
            f"(Current: {_fmt_float(self.value_)}, Default: {_fmt_float(self.default)}, "
            f"Step: {_fmt_float(self.step)}, "
            f"Range: ({_fmt_float(self.min)}, {_fmt_float(self.max)}))"
        )


@dataclass(frozen=True)
class BooleanDescription(ControlValueDescription):
    value_: bool
    default: bool

    def value(self) -> ControlValueSetter:
        return BooleanValue(self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        return isinstance(setter, BooleanValue)

    def __str__(self) -> str:
        return f"(Current: {_fmt_bool(self.value_)}, Default: {_fmt_bool(self.default)})"


@dataclass(frozen=True)
class StringDescription(ControlValueDescription):
    value_: str
    default: Optional[str] = None

    def value(self) -> ControlValueSetter:
        return StringValue(self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        return isinstance(setter, StringValue)

    def __str__(self) -> str:
        default = "None" if self.default is None else f"Some({_debug_str(self.default)})"
        return f"(Current: {self.value_}, Default: {default})"


@dataclass(frozen=True)
class BytesDescription(ControlValueDescription):
    value_: bytes
    default: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "value_", bytes(self.value_))
        object.__setattr__(self, "default", bytes(self.default))

    def value(self) -> ControlValueSetter:
        return BytesValue(self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        return isinstance(setter, BytesValue)

    def __str__(self) -> str:
        return f"(Current: {_hex_list(self.value_)}, Default: {_hex_list(self.default)})"


@dataclass(frozen=True)
class KeyValuePairDescription(ControlValueDescription):
    key: int
    value_: int
    default: Tuple[int, int]

    def __post_init__(self) -> None:
        key, value = self.default
        object.__setattr__(self, "default", (key, value))

    def value(self) -> ControlValueSetter:
        return KeyValue(self.key, self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        return isinstance(setter, KeyValue)

    def __str__(self) -> str:
        return (
            f"Current: ({self.key}, {self.value_}), "
            f"Default: ({self.default[0]}, {self.default[1]})"
        )


@dataclass(frozen=True)
class PointDescription(ControlValueDescription):
    value_: Tuple[float, float]
    default: Tuple[float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "value_", _float_pair(self.value_))
        object.__setattr__(self, "default", _float_pair(self.default))

    def value(self) -> ControlValueSetter:
        return PointValue(*self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        if not isinstance(setter, PointValue):
            return False
        return math.isfinite(setter.x) and math.isfinite(setter.y)

    def __str__(self) -> str:
        vx, vy = (_fmt_float(n) for n in self.value_)
        dx, dy = (_fmt_float(n) for n in self.default)
        return f"Current: ({vx}, {vy}), Default: ({dx}, {dy})"


@dataclass(frozen=True)
class EnumDescription(ControlValueDescription):
    value_: int
    possible: Tuple[int, ...]
    default: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "possible", tuple(self.possible))

    def value(self) -> ControlValueSetter:
        return EnumValue(self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        return isinstance(setter, EnumValue) and setter.value in self.possible

    def __str__(self) -> str:
        return (
            f"Current: {self.value_}, Possible Values: {_int_list(self.possible)}, "
            f"Default: {self.default}"
        )


@dataclass(frozen=True)
class RGBDescription(ControlValueDescription):
    value_: Tuple[float, float, float]
    max: Tuple[float, float, float]
    default: Tuple[float, float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "value_", _float_triple(self.value_))
        object.__setattr__(self, "max", _float_triple(self.max))
        object.__setattr__(self, "default", _float_triple(self.default))

    def value(self) -> ControlValueSetter:
        return RGBValue(*self.value_)

    def verify_setter(self, setter: ControlValueSetter) -> bool:
        if not isinstance(setter, RGBValue):
            return False
        return setter.r >= self.max[0] and setter.g >= self.max[1] and setter.b >= self.max[2]

    def __str__(self) -> str:
        def triple(values: Tuple[float, float, float]) -> str:
            return "(" + ", ".join(_fmt_float(n) for n in values) + ")"

        return (
            f"Current: {triple(self.value_)}, Max: {triple(self.max)}, "
            f"Default: {triple(self.default)}"
        )


# ---------------------------------------------------------------------------
# Control record
# ---------------------------------------------------------------------------


@dataclass
class CameraControl:
    """Everything known about one control of a camera.

    ``min`` and ``max`` of range descriptions are to be read as non-inclusive.
    """

    control: CameraControlId
    name: str
    description: ControlValueDescription
    flag: List[KnownCameraControlFlag] = field(default_factory=list)
    active: bool = True

    def value(self) -> ControlValueSetter:
        """The current value of the control as a setter."""
        return self.description.value()

    def __str__(self) -> str:
        flags = "[" + ", ".join(str(f) for f in self.flag) + "]"
        return (
            f"Control: {self.control}, Name: {self.name}, Value: {self.description}, "
            f"Flag: {flags}, Active: {_fmt_bool(self.active)}"
        )