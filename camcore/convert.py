"""Pixel format conversions to packed RGB (R, G, B, ...) or RGBA."""

from __future__ import annotations

import functools
import io
import struct
from typing import Iterable, Iterator, Tuple

from PIL import Image

from camcore.error import ProcessFrameError
from camcore.frame_format import FrameFormat
from camcore.types import Resolution

_F32 = struct.Struct("<f")


def _f32(number: float) -> float:
    """Round ``number`` to single precision."""
    return _F32.unpack(_F32.pack(number))[0]


_K_RV = _f32(1.370705)
_K_GV = _f32(0.698001)
_K_GU = _f32(0.337633)
_K_BU = _f32(1.732446)

_JPEG_FORMATS = frozenset({"JPEG", "MPO"})


def _to_u8(number: float) -> int:
    """Truncate toward zero and clamp to a byte; NaN becomes 0."""
    if number != number or number <= 0.0:
        return 0
    if number >= 255.0:
        return 255
    return int(number)


@functools.lru_cache(maxsize=None)
def _chroma_offsets(u: int, v: int) -> Tuple[float, float, float, float]:
    v_centered = _f32(v - 128.0)
    u_centered = _f32(u - 128.0)
    return (
        _f32(_K_RV * v_centered),
        _f32(_K_GV * v_centered),
        _f32(_K_GU * u_centered),
        _f32(_K_BU * u_centered),
    )


def _yuy2_pixel(y: int, offsets: Tuple[float, float, float, float]) -> Tuple[int, int, int]:
    r_off, g_v, g_u, b_off = offsets
    luma = float(y)
    red = _f32(luma + r_off)
    green = _f32(_f32(luma - g_v) - g_u)
    blue = _f32(luma + b_off)
    return (_to_u8(red), _to_u8(green), _to_u8(blue))


def _pairs(data: Iterable[int]) -> Iterator[Tuple[int, int]]:
    it = iter(data)
    return zip(it, it)


def yuyv422_predicted_size(size: int, rgba: bool = False) -> int:
    """The size of the RGB(A) output for a YUYV 4:2:2 input of ``size`` bytes."""
    pixel_size = 4 if rgba else 3
    # Every 4-byte YUYV chunk yields two pixels.
    return (size // 4) * (2 * pixel_size)


def yuyv422_to_rgb(data: bytes, rgba: bool = False) -> bytes:
    """Convert a YUYV 4:2:2 stream to packed RGB888, or RGBA8888 if ``rgba``."""
    data = bytes(data)
    if len(data) % 4 != 0:
        raise ProcessFrameError(
            FrameFormat.Yuv422,
            "RGB888",
            "Assertion failure, the YUV stream isn't 4:2:2! (wrong number of bytes)",
        )
    out = bytearray()
    it = iter(data)
    for y0, u, y1, v in zip(it, it, it, it):
        offsets = _chroma_offsets(u, v)
        for luma in (y0, y1):
            out += bytes(_yuy2_pixel(luma, offsets))
            if rgba:
                out.append(255)
    return bytes(out)


def yuyv444_to_rgb(y: int, u: int, v: int) -> Tuple[int, int, int]:
    """Convert one YCbCr 4:4:4 sample to an (R, G, B) triple."""
    c298 = (y - 16) * 298
    d = u - 128
    e = v - 128
    red = ((c298 + 409 * e + 128) >> 8) & 0xFF
    green = ((c298 - 100 * d - 208 * e + 128) >> 8) & 0xFF
    blue = ((c298 + 516 * d + 128) >> 8) & 0xFF
    return (red, green, blue)


def yuyv444_to_rgba(y: int, u: int, v: int) -> Tuple[int, int, int, int]:
    """Like :func:`yuyv444_to_rgb`, with an opaque alpha channel."""
    red, green, blue = yuyv444_to_rgb(y, u, v)
    return (red, green, blue, 255)


def nv12_to_rgb(resolution: Resolution, data: bytes, rgba: bool = False) -> bytes:
    """Convert a bi-planar 4:2:0 (NV12) frame to packed RGB888, or RGBA8888 if ``rgba``."""
    width, height = resolution.width, resolution.height
    if width % 2 != 0 or height % 2 != 0:
        raise ProcessFrameError(FrameFormat.Nv12, "RGB", "bad resolution")
    data = bytes(data)
    luma_size = width * height
    if len(data) != (luma_size * 3) // 2:
        raise ProcessFrameError(FrameFormat.Nv12, "RGB", "bad input buffer size")

    convert = yuyv444_to_rgba if rgba else yuyv444_to_rgb
    out = bytearray()
    for row in range(height):
        luma_row = data[row * width : (row + 1) * width]
        chroma_start = luma_size + (row // 2) * width
        chroma_row = data[chroma_start : chroma_start + width]
        for (y0, y1), (u, v) in zip(_pairs(luma_row), _pairs(chroma_row)):
            out += bytes(convert(y0, u, v))
            out += bytes(convert(y1, u, v))
    return bytes(out)


def mjpeg_to_rgb(data: bytes, rgba: bool = False) -> bytes:
    """Decode one MJPEG frame to packed RGB888, or RGBA8888 if ``rgba``."""
    try:
        with Image.open(io.BytesIO(bytes(data))) as image:
            if image.format not in _JPEG_FORMATS:
                raise ProcessFrameError(FrameFormat.MJpeg, "RGB888", "not a JPEG stream")
            return image.convert("RGBA" if rgba else "RGB").tobytes()
    except ProcessFrameError:
        raise
    except (OSError, ValueError, SyntaxError) as why:
        raise ProcessFrameError(FrameFormat.MJpeg, "RGB888", str(why)) from why