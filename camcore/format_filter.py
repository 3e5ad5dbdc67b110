"""Choosing a camera format from what a device offers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set, Tuple, Union

from camcore.frame_format import (
    Backend,
    CustomFrameFormat,
    FrameFormat,
    PlatformFrameFormat,
    source_frame_format,
)
from camcore.types import CameraFormat, Resolution

_U32_MASK = 0xFFFF_FFFF


class RequestedFormatType(enum.Enum):
    """How to pick a camera format.

    - ``AbsoluteHighestResolution``: highest resolution, then highest frame rate.
    - ``AbsoluteHighestFrameRate``: highest frame rate, then highest resolution.
    - ``HighestResolution``: highest resolution at the given frame rate.
    - ``HighestFrameRate``: highest frame rate at the given resolution.
    - ``Exact``: exactly the given format.
    - ``ClosestGreater``: closest format whose resolution and rate are at least the given ones.
    - ``ClosestLess``: closest format whose resolution and rate are at most the given ones.
    - ``Closest``: closest format by resolution and frame rate.
    - ``NONE``: any format.
    """

    AbsoluteHighestResolution = "AbsoluteHighestResolution"
    AbsoluteHighestFrameRate = "AbsoluteHighestFrameRate"
    HighestResolution = "HighestResolution"
    HighestFrameRate = "HighestFrameRate"
    Exact = "Exact"
    ClosestGreater = "ClosestGreater"
    ClosestLess = "ClosestLess"
    Closest = "Closest"
    NONE = "None"


_VALUE_TYPES = {
    RequestedFormatType.AbsoluteHighestResolution: None,
    RequestedFormatType.AbsoluteHighestFrameRate: None,
    RequestedFormatType.HighestResolution: int,
    RequestedFormatType.HighestFrameRate: Resolution,
    RequestedFormatType.Exact: CameraFormat,
    RequestedFormatType.ClosestGreater: CameraFormat,
    RequestedFormatType.ClosestLess: CameraFormat,
    RequestedFormatType.Closest: CameraFormat,
    RequestedFormatType.NONE: None,
}


def _debug_resolution(res: Resolution) -> str:
    return f"Resolution {{ width_x: {res.width}, height_y: {res.height} }}"


def _debug_camera_format(fmt: CameraFormat) -> str:
    if isinstance(fmt.format, PlatformFrameFormat):
        source = f"PlatformSpecific({fmt.format})"
    else:
        source = f"FrameFormat({fmt.format})"
    return (
        f"CameraFormat {{ resolution: {_debug_resolution(fmt.resolution)}, "
        f"format: {source}, frame_rate: {fmt.frame_rate} }}"
    )


@dataclass(frozen=True)
class RequestedFormat:
    """A format request: its kind and, where the kind needs one, its argument."""

    kind: RequestedFormatType = RequestedFormatType.NONE
    value: Union[None, int, Resolution, CameraFormat] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, RequestedFormatType):
            raise TypeError("kind must be a RequestedFormatType")
        expected = _VALUE_TYPES[self.kind]
        if expected is None:
            if self.value is not None:
                raise TypeError(f"{self.kind.value} takes no value")
            return
        if not isinstance(self.value, expected) or isinstance(self.value, bool):
            raise TypeError(f"{self.kind.value} needs a {expected.__name__}")
        if expected is int and not 0 <= self.value <= _U32_MASK:
            raise ValueError("frame rate must fit in an unsigned 32-bit integer")

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.value
        if isinstance(self.value, Resolution):
            inner = _debug_resolution(self.value)
        elif isinstance(self.value, CameraFormat):
            inner = _debug_camera_format(self.value)
        else:
            inner = str(self.value)
        return f"{self.kind.value}({inner})"


@dataclass
class FormatFilter:
    """A format request plus the frame formats a chosen format may use."""

    requested: RequestedFormat = field(default_factory=RequestedFormat)
    allowed_formats: Set[Union[FrameFormat, CustomFrameFormat]] = field(default_factory=set)
    platform_formats: Dict[Backend, Set[int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.requested, RequestedFormatType):
            self.requested = RequestedFormat(self.requested)
        if not isinstance(self.requested, RequestedFormat):
            raise TypeError("requested must be a RequestedFormat")
        self.allowed_formats = set(self.allowed_formats)
        self.platform_formats = {k: set(v) for k, v in self.platform_formats.items()}

    @classmethod
    def default(cls) -> "FormatFilter":
        """The closest format to 640x480 at 30 FPS in YUYV 4:2:2."""
        target = CameraFormat(Resolution(640, 480), FrameFormat.Yuv422, 30)
        return cls(
            RequestedFormat(RequestedFormatType.Closest, target),
            {FrameFormat.Yuv422},
        )

    def add_allowed_frame_format(
        self, frame_format: Union[FrameFormat, CustomFrameFormat]
    ) -> "FormatFilter":
        if not isinstance(frame_format, (FrameFormat, CustomFrameFormat)):
            raise TypeError(f"{frame_format!r} is not a frame format")
        self.allowed_formats.add(frame_format)
        return self

    def add_allowed_frame_formats(
        self, frame_formats: Iterable[Union[FrameFormat, CustomFrameFormat]]
    ) -> "FormatFilter":
        for frame_format in frame_formats:
            self.add_allowed_frame_format(frame_format)
        return self

    def add_allowed_platform_specific(self, platform: Backend, frame_format: int) -> "FormatFilter":
        checked = PlatformFrameFormat(platform, frame_format)
        self.platform_formats.setdefault(checked.backend, set()).add(checked.format)
        return self

    def add_allowed_platform_specifics(
        self, platform_specifics: Iterable[Tuple[Backend, int]]
    ) -> "FormatFilter":
        for platform, frame_format in platform_specifics:
            self.add_allowed_platform_specific(platform, frame_format)
        return self

    def accepts(self, fmt) -> bool:
        """Whether a camera format using ``fmt`` may be chosen."""
        fmt = source_frame_format(fmt)
        if isinstance(fmt, PlatformFrameFormat):
            return fmt.format in self.platform_formats.get(fmt.backend, set())
        return fmt in self.allowed_formats


def _distance(a: CameraFormat, b: CameraFormat) -> float:
    # Squared differences wrap at 32 bits, as the device layer computes them.
    x = ((b.width - a.width) ** 2) & _U32_MASK
    y = ((b.height - a.height) ** 2) & _U32_MASK
    z = ((b.frame_rate - a.frame_rate) ** 2) & _U32_MASK
    return float(x) + float(y) + float(z)


def _closest(target: CameraFormat, candidates: Iterable[CameraFormat]) -> Optional[CameraFormat]:
    return min(candidates, key=lambda fmt: _distance(target, fmt), default=None)


def _last_max(candidates, key) -> Optional[CameraFormat]:
    ordered = sorted(candidates, key=key)
    return ordered[-1] if ordered else None


def format_fulfill(
    sources: Iterable[CameraFormat], filter: FormatFilter  # noqa: A002
) -> Optional[CameraFormat]:
    """Pick the format from ``sources`` that best fits ``filter``, or ``None``."""
    accepted = [fmt for fmt in sources if filter.accepts(fmt.format)]
    kind = filter.requested.kind
    arg = filter.requested.value

    if kind is RequestedFormatType.AbsoluteHighestResolution:
        return _last_max(accepted, key=lambda fmt: fmt.resolution)
    if kind is RequestedFormatType.AbsoluteHighestFrameRate:
        return _last_max(accepted, key=lambda fmt: fmt.frame_rate)
    if kind is RequestedFormatType.HighestResolution:
        matching = [fmt for fmt in accepted if fmt.frame_rate == arg]
        return _last_max(matching, key=CameraFormat.sort_key)
    if kind is RequestedFormatType.HighestFrameRate:
        matching = [fmt for fmt in accepted if fmt.resolution == arg]
        return _last_max(matching, key=CameraFormat.sort_key)
    if kind is RequestedFormatType.Exact:
        matching = [fmt for fmt in accepted if fmt == arg]
        return matching[-1] if matching else None
    if kind is RequestedFormatType.Closest:
        return _closest(arg, accepted)
    if kind is RequestedFormatType.ClosestGreater:
        return _closest(
            arg,
            (
                fmt
                for fmt in accepted
                if fmt.resolution >= arg.resolution and fmt.frame_rate >= arg.frame_rate
            ),
        )
    if kind is RequestedFormatType.ClosestLess:
        return _closest(
            arg,
            (
                fmt
                for fmt in accepted
                if fmt.resolution <= arg.resolution and fmt.frame_rate <= arg.frame_rate
            ),
        )
    return accepted[0] if accepted else None