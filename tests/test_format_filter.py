import pytest

from camcore.backend import ApiBackend
from camcore.format_filter import (
    FormatFilter,
    RequestedFormat,
    RequestedFormatType,
    format_fulfill,
)
from camcore.frame_format import CustomFrameFormat, FrameFormat, PlatformFrameFormat
from camcore.types import CameraFormat, Resolution

SOURCES = [
    CameraFormat(Resolution(640, 480), FrameFormat.Yuv422, 30),
    CameraFormat(Resolution(1280, 720), FrameFormat.Yuv422, 30),
    CameraFormat(Resolution(1920, 1080), FrameFormat.MJpeg, 15),
    CameraFormat(Resolution(1280, 720), FrameFormat.Yuv422, 60),
    CameraFormat(Resolution(320, 240), FrameFormat.Yuv422, 120),
]


def _yuyv_filter(kind, value=None):
    return FormatFilter(RequestedFormat(kind, value), {FrameFormat.Yuv422})


def test_default_filter():
    flt = FormatFilter.default()
    assert flt.requested.kind is RequestedFormatType.Closest
    assert flt.requested.value == CameraFormat(Resolution(640, 480), FrameFormat.Yuv422, 30)
    assert flt.allowed_formats == {FrameFormat.Yuv422}
    assert flt.platform_formats == {}


def test_absolute_highest_resolution_takes_last_tie():
    result = format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.AbsoluteHighestResolution))
    assert result == SOURCES[3]


def test_absolute_highest_frame_rate():
    result = format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.AbsoluteHighestFrameRate))
    assert result == SOURCES[4]


def test_highest_resolution_at_rate():
    result = format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.HighestResolution, 30))
    assert result == SOURCES[1]


def test_highest_frame_rate_at_resolution():
    flt = _yuyv_filter(RequestedFormatType.HighestFrameRate, Resolution(1280, 720))
    assert format_fulfill(SOURCES, flt) == SOURCES[3]


def test_exact_match_and_filtered_out():
    assert format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.Exact, SOURCES[0])) == SOURCES[0]
    assert format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.Exact, SOURCES[2])) is None


def test_closest():
    target = CameraFormat(Resolution(1300, 700), FrameFormat.Yuv422, 55)
    assert format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.Closest, target)) == SOURCES[3]
    exact = format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.Closest, SOURCES[0]))
    assert exact == SOURCES[0]


def test_closest_tie_prefers_first_source():
    a = CameraFormat(Resolution(600, 480), FrameFormat.Yuv422, 30)
    b = CameraFormat(Resolution(680, 480), FrameFormat.Yuv422, 30)
    target = CameraFormat(Resolution(640, 480), FrameFormat.Yuv422, 30)
    flt = _yuyv_filter(RequestedFormatType.Closest, target)
    assert format_fulfill([a, b], flt) == a
    assert format_fulfill([b, a], flt) == b


def test_closest_greater():
    target = CameraFormat(Resolution(700, 500), FrameFormat.Yuv422, 30)
    result = format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.ClosestGreater, target))
    assert result == SOURCES[1]
    assert result.resolution >= target.resolution
    assert result.frame_rate >= target.frame_rate


def test_closest_less():
    target = CameraFormat(Resolution(1280, 720), FrameFormat.Yuv422, 45)
    result = format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.ClosestLess, target))
    assert result == SOURCES[1]
    assert result.frame_rate <= target.frame_rate


def test_closest_less_none_when_everything_larger():
    target = CameraFormat(Resolution(100, 100), FrameFormat.Yuv422, 10)
    assert format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.ClosestLess, target)) is None


def test_none_returns_first_accepted():
    assert format_fulfill(SOURCES, _yuyv_filter(RequestedFormatType.NONE)) == SOURCES[0]
    mjpeg = FormatFilter(RequestedFormat(), {FrameFormat.MJpeg})
    assert format_fulfill(SOURCES, mjpeg) == SOURCES[2]


def test_empty_filter_accepts_nothing():
    assert format_fulfill(SOURCES, FormatFilter(RequestedFormatType.NONE)) is None


def test_platform_specific_formats():
    platform = CameraFormat(
        Resolution(640, 480), PlatformFrameFormat(ApiBackend.MediaFoundation, 5), 30
    )
    flt = FormatFilter().add_allowed_platform_specific(ApiBackend.MediaFoundation, 5)
    assert format_fulfill([platform], flt) == platform
    other = FormatFilter().add_allowed_platform_specific(ApiBackend.Video4Linux, 5)
    assert format_fulfill([platform], other) is None


def test_builder_methods_chain_and_accumulate():
    flt = FormatFilter()
    returned = flt.add_allowed_frame_formats([FrameFormat.Nv12, CustomFrameFormat(7)])
    assert returned is flt
    flt.add_allowed_platform_specifics(
        [(ApiBackend.MediaFoundation, 1), (ApiBackend.MediaFoundation, 2)]
    )
    assert flt.accepts(FrameFormat.Nv12)
    assert flt.accepts(CustomFrameFormat(7))
    assert not flt.accepts(FrameFormat.Yuv422)
    assert flt.accepts((ApiBackend.MediaFoundation, 2))
    assert flt.platform_formats[ApiBackend.MediaFoundation] == {1, 2}


def test_add_rejects_non_format():
    with pytest.raises(TypeError):
        FormatFilter().add_allowed_frame_format("MJPEG")


def test_requested_format_validation():
    with pytest.raises(TypeError):
        RequestedFormat(RequestedFormatType.HighestResolution)
    with pytest.raises(TypeError):
        RequestedFormat(RequestedFormatType.NONE, 30)
    with pytest.raises(TypeError):
        RequestedFormat(RequestedFormatType.Exact, Resolution(1, 1))


def test_requested_format_str():
    assert str(RequestedFormat()) == "None"
    assert (
        str(RequestedFormat(RequestedFormatType.AbsoluteHighestFrameRate))
        == "AbsoluteHighestFrameRate"
    )
    assert str(RequestedFormat(RequestedFormatType.HighestResolution, 30)) == "HighestResolution(30)"


def test_filter_accepts_bare_kind():
    flt = FormatFilter(RequestedFormatType.AbsoluteHighestResolution, {FrameFormat.Yuv422})
    assert flt.requested == RequestedFormat(RequestedFormatType.AbsoluteHighestResolution)
    assert format_fulfill(SOURCES, flt) == SOURCES[3]