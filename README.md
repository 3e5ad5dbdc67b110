# camcore

Building blocks for camera capture code: describing camera formats, choosing
one from what a device offers, describing and validating camera controls,
holding captured frames, and converting raw pixel data to RGB.

## Installation

```
pip install camcore
```

Pillow is installed with it and is used to decode MJPEG frames.

To run the test suite:

```
pip install "camcore[test]"
pytest
```

## Modules

- `camcore.types`: `Resolution` (ordered by width, then height),
  `CameraFormat` (resolution, frame format, frame rate; defaults to
  640x480 at 30 FPS, MJPEG), `CameraIndex` (a number or a string, with
  `as_index()` and `as_string()`), `CameraInfo`, `KnownCameraControl`,
  `OtherControl`, `KnownCameraControlFlag` and `all_known_camera_controls()`.
- `camcore.frame_format`: the `FrameFormat` enum (`MJpeg`, `Yuv422`, `Nv12`,
  `Rgb8` and others), `CustomFrameFormat` for codes outside that set,
  `PlatformFrameFormat` for backend-specific codes, and
  `source_frame_format()`, which also accepts a `(backend, code)` pair.
- `camcore.backend`: the `ApiBackend` enum and `CustomBackend`.
- `camcore.format_filter`: `RequestedFormatType`, `RequestedFormat`,
  `FormatFilter` and `format_fulfill()`, which picks the best match from a
  list of offered formats, or returns `None`.
- `camcore.controls`: value setters (`IntegerValue`, `FloatValue`,
  `BooleanValue`, `StringValue`, `BytesValue`, `KeyValue`, `PointValue`,
  `EnumValue`, `RGBValue`, `NoValue`), value descriptions
  (`IntegerRangeDescription`, `FloatDescription`, `EnumDescription` and
  others) with `value()` and `verify_setter()`, and `CameraControl`.
- `camcore.buffer`: `Buffer`, a captured frame with its resolution, bytes
  and source frame format.
- `camcore.convert`: `yuyv422_to_rgb()`, `yuyv422_predicted_size()`,
  `nv12_to_rgb()`, `mjpeg_to_rgb()`, and the per-pixel helpers
  `yuyv444_to_rgb()` and `yuyv444_to_rgba()`. Each conversion returns
  `bytes` and takes `rgba=True` for RGBA output.
- `camcore.traits`: `CaptureBackend` and `AsyncCaptureBackend`, abstract
  interfaces for a capture backend. They provide
  `compatible_camera_formats()` and `one_shot()` (and their async
  counterparts) on top of the abstract methods.
- `camcore.error`: `NokhwaError` and its subclasses, such as
  `ProcessFrameError`, `OpenDeviceError` and `GeneralError`.

## Example

```python
from camcore.format_filter import FormatFilter, format_fulfill
from camcore.frame_format import FrameFormat
from camcore.types import CameraFormat, Resolution

offered = [
    CameraFormat(Resolution(640, 480), FrameFormat.Yuv422, 30),
    CameraFormat(Resolution(1280, 720), FrameFormat.Yuv422, 30),
    CameraFormat(Resolution(1920, 1080), FrameFormat.MJpeg, 30),
]

chosen = format_fulfill(offered, FormatFilter.default())
print(chosen)  # 640x480@30FPS, Yuv422 Format
```

Converting a raw YUYV frame:

```python
from camcore.convert import yuyv422_to_rgb

rgb = yuyv422_to_rgb(raw_bytes, rgba=False)
```

Checking a value against a control description:

```python
from camcore.controls import IntegerRangeDescription, IntegerValue

brightness = IntegerRangeDescription(min=0, max=255, value_=128, step=1, default=128)
brightness.verify_setter(IntegerValue(200))  # True
brightness.verify_setter(IntegerValue(300))  # False
```

## Errors

Every error the package raises is a subclass of `camcore.error.NokhwaError`,
so a single `except NokhwaError` catches them all. Conversions raise
`ProcessFrameError` on malformed input, and `CameraIndex.as_index()` raises
`GeneralError` when a string index is not a number.

## What it does not do

The package talks to no camera. It has no backend that opens a device,
lists cameras or reads frames: `CaptureBackend` and `AsyncCaptureBackend`
only define the interface such a backend implements. There is no command
line tool.