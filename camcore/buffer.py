"""Raw frame buffers returned by a camera."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from camcore.frame_format import SourceFrameFormat, source_frame_format
from camcore.types import Resolution


@dataclass(frozen=True)
class Buffer:
    """A captured frame: its resolution, its bytes and the format they are in."""

    resolution: Resolution
    buffer: bytes
    source_frame_format: SourceFrameFormat

    def __post_init__(self) -> None:
        if not isinstance(self.resolution, Resolution):
            raise TypeError("resolution must be a Resolution")
        data: Any = self.buffer
        if isinstance(data, str) or not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("buffer must be bytes-like")
        object.__setattr__(self, "buffer", bytes(data))
        object.__setattr__(
            self, "source_frame_format", source_frame_format(self.source_frame_format)
        )