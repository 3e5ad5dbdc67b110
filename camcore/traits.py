"""Interfaces that every capture backend implements."""

from __future__ import annotations

import abc
from typing import Dict, List, Optional

from camcore.backend import ApiBackend, CustomBackend
from camcore.buffer import Buffer
from camcore.controls import CameraControl, ControlValueSetter
from camcore.format_filter import FormatFilter
from camcore.frame_format import SourceFrameFormat
from camcore.types import CameraControlId, CameraFormat, CameraInfo, Resolution

__all__ = ["CaptureBackend", "AsyncCaptureBackend"]


class CaptureBackend(abc.ABC):
    """A backend that opens a camera and takes frames from it.

    Many backends block while the camera is busy. Backends that are not given
    a camera format start at 640x480, 15 FPS, MJPEG. After
    :meth:`stop_stream` a backend usually needs :meth:`open_stream` again
    before it delivers more frames.
    """

    @abc.abstractmethod
    def init(self) -> None:
        """Prepare the camera for use with an arbitrary (usually the first) format."""

    @abc.abstractmethod
    def init_with_format(self, format_filter: FormatFilter) -> CameraFormat:
        """Prepare the camera with a format that fits ``format_filter`` and return it."""

    @abc.abstractmethod
    def backend(self) -> ApiBackend | CustomBackend:
        """The backend in use."""

    @abc.abstractmethod
    def camera_info(self) -> CameraInfo:
        """Name, index and other information about the camera."""

    @abc.abstractmethod
    def refresh_camera_format(self) -> None:
        """Bring the stored camera format in line with the camera's actual state."""

    @abc.abstractmethod
    def camera_format(self) -> Optional[CameraFormat]:
        """The current camera format, if known."""

    @abc.abstractmethod
    def set_camera_format(self, new_fmt: CameraFormat) -> None:
        """Set the camera format, resetting an open stream."""

    @abc.abstractmethod
    def compatible_list_by_resolution(
        self, fourcc: SourceFrameFormat
    ) -> Dict[Resolution, List[int]]:
        """Frame rates available at each resolution for ``fourcc``; not sorted."""

    def compatible_camera_formats(self) -> List[CameraFormat]:
        """Every camera format the device supports."""
        return [
            CameraFormat(resolution, fourcc, fps)
            for fourcc in self.compatible_fourcc()
            for resolution, fps_list in self.compatible_list_by_resolution(fourcc).items()
            for fps in fps_list
        ]

    @abc.abstractmethod
    def compatible_fourcc(self) -> List[SourceFrameFormat]:
        """The frame formats the device supports."""

    @abc.abstractmethod
    def resolution(self) -> Optional[Resolution]:
        """The current resolution, if known."""

    @abc.abstractmethod
    def set_resolution(self, new_res: Resolution) -> None:
        """Set the resolution, resetting an open stream."""

    @abc.abstractmethod
    def frame_rate(self) -> Optional[int]:
        """The current frame rate, if known."""

    @abc.abstractmethod
    def set_frame_rate(self, new_fps: int) -> None:
        """Set the frame rate, resetting an open stream."""

    @abc.abstractmethod
    def frame_format(self) -> SourceFrameFormat:
        """The current frame format."""

    @abc.abstractmethod
    def set_frame_format(self, fourcc: SourceFrameFormat) -> None:
        """Set the frame format, resetting an open stream."""

    @abc.abstractmethod
    def camera_control(self, control: CameraControlId) -> CameraControl:
        """The state of one camera control."""

    @abc.abstractmethod
    def camera_controls(self) -> List[CameraControl]:
        """Every control the camera supports."""

    @abc.abstractmethod
    def set_camera_control(self, control: CameraControlId, value: ControlValueSetter) -> None:
        """Write ``value`` to ``control``."""

    @abc.abstractmethod
    def open_stream(self) -> None:
        """Open the camera stream with the current settings."""

    @abc.abstractmethod
    def is_stream_open(self) -> bool:
        """Whether the stream is open."""

    @abc.abstractmethod
    def frame(self) -> Buffer:
        """Take one frame from the camera."""

    @abc.abstractmethod
    def frame_raw(self) -> bytes:
        """Take one frame from the camera without any processing."""

    @abc.abstractmethod
    def stop_stream(self) -> None:
        """Close the stream."""

    def one_shot(self) -> Buffer:
        """Take a single frame, opening and closing the stream if it is not open."""
        if self.is_stream_open():
            return self.frame()
        self.open_stream()
        frame = self.frame()
        self.stop_stream()
        return frame


class AsyncCaptureBackend(CaptureBackend):
    """A capture backend that also offers awaitable operations."""

    @abc.abstractmethod
    async def init_async(self) -> None:
        """Prepare the camera for use with an arbitrary (usually the first) format."""

    @abc.abstractmethod
    async def init_with_format_async(self, format_filter: FormatFilter) -> CameraFormat:
        """Prepare the camera with a format that fits ``format_filter`` and return it."""

    @abc.abstractmethod
    async def refresh_camera_format_async(self) -> None:
        """Bring the stored camera format in line with the camera's actual state."""

    @abc.abstractmethod
    async def set_camera_format_async(self, new_fmt: CameraFormat) -> None:
        """Set the camera format, resetting an open stream."""

    @abc.abstractmethod
    async def compatible_list_by_resolution_async(
        self, fourcc: SourceFrameFormat
    ) -> Dict[Resolution, List[int]]:
        """Frame rates available at each resolution for ``fourcc``; not sorted."""

    async def compatible_camera_formats_async(self) -> List[CameraFormat]:
        """Every camera format the device supports."""
        formats: List[CameraFormat] = []
        for fourcc in await self.compatible_fourcc_async():
            by_resolution = await self.compatible_list_by_resolution_async(fourcc)
            formats.extend(
                CameraFormat(resolution, fourcc, fps)
                for resolution, fps_list in by_resolution.items()
                for fps in fps_list
            )
        return formats

    @abc.abstractmethod
    async def compatible_fourcc_async(self) -> List[SourceFrameFormat]:
        """The frame formats the device supports."""

    @abc.abstractmethod
    async def set_resolution_async(self, new_res: Resolution) -> None:
        """Set the resolution, resetting an open stream."""

    @abc.abstractmethod
    async def set_frame_rate_async(self, new_fps: int) -> None:
        """Set the frame rate, resetting an open stream."""

    @abc.abstractmethod
    async def set_frame_format_async(self, fourcc: SourceFrameFormat) -> None:
        """Set the frame format, resetting an open stream."""

    @abc.abstractmethod
    async def camera_control_async(self, control: CameraControlId) -> CameraControl:
        """The state of one camera control."""

    @abc.abstractmethod
    async def camera_controls_async(self) -> List[CameraControl]:
        """Every control the camera supports."""

    @abc.abstractmethod
    async def set_camera_control_async(
        self, control: CameraControlId, value: ControlValueSetter
    ) -> None:
        """Write ``value`` to ``control``."""

    @abc.abstractmethod
    async def open_stream_async(self) -> None:
        """Open the camera stream with the current settings."""

    @abc.abstractmethod
    async def frame_async(self) -> Buffer:
        """Take one frame from the camera."""

    @abc.abstractmethod
    async def frame_raw_async(self) -> bytes:
        """Take one frame from the camera without any processing."""

    @abc.abstractmethod
    async def stop_stream_async(self) -> None:
        """Close the stream."""

    async def one_shot_async(self) -> Buffer:
        """Take a single frame, opening and closing the stream if it is not open."""
        if self.is_stream_open():
            return await self.frame_async()
        await self.open_stream_async()
        frame = await self.frame_async()
        await self.stop_stream_async()
        return frame