"""Errors raised by the capture library."""

from __future__ import annotations

from typing import Any


class NokhwaError(Exception):
    """Base class of every error raised by the library."""


class UninitializedError(NokhwaError):
    """The camera was used before it was initialised."""

    def __init__(self) -> None:
        super().__init__("Unitialized Camera. Call `init()` first!")


class InitializeError(NokhwaError):
    """A backend could not be initialised."""

    def __init__(self, backend: Any, error: str) -> None:
        self.backend = backend
        self.error = error
        super().__init__(f"Could not initialize {backend}: {error}")


class ShutdownError(NokhwaError):
    """A backend could not be shut down."""

    def __init__(self, backend: Any, error: str) -> None:
        self.backend = backend
        self.error = error
        super().__init__(f"Could not shutdown {backend}: {error}")


class GeneralError(NokhwaError):
    """An error without a more specific kind."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Error: {message}")


class StructureError(NokhwaError):
    """A required structure could not be built."""

    def __init__(self, structure: str, error: str) -> None:
        self.structure = structure
        self.error = error
        super().__init__(f"Could not generate required structure {structure}: {error}")


class OpenDeviceError(NokhwaError):
    """A device could not be opened."""

    def __init__(self, device: str, error: str) -> None:
        self.device = device
        self.error = error
        super().__init__(f"Could not open device {device}: {error}")


class GetPropertyError(NokhwaError):
    """A device property could not be read."""

    def __init__(self, property: str, error: str) -> None:  # noqa: A002
        self.property = property
        self.error = error
        super().__init__(f"Could not get device property {property}: {error}")


class SetPropertyError(NokhwaError):
    """A device property could not be written."""

    def __init__(self, property: str, value: str, error: str) -> None:  # noqa: A002
        self.property = property
        self.value = value
        self.error = error
        super().__init__(
            f"Could not set device property {property} with value {value}: {error}"
        )


class OpenStreamError(NokhwaError):
    """The device stream could not be opened."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Could not open device stream: {message}")


class ReadFrameError(NokhwaError):
    """A frame could not be captured."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Could not capture frame: {message}")


class ProcessFrameError(NokhwaError):
    """A frame could not be converted from one format to another."""

    def __init__(self, src: Any, destination: str, error: str) -> None:
        self.src = src
        self.destination = destination
        self.error = error
        super().__init__(f"Could not process frame {src} to {destination}: {error}")


class StreamShutdownError(NokhwaError):
    """The stream could not be stopped."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Could not stop stream: {message}")


class UnsupportedOperationError(NokhwaError):
    """The backend does not support the requested operation."""

    def __init__(self, backend: Any) -> None:
        self.backend = backend
        super().__init__(f"This operation is not supported by backend {backend}.")


class FeatureNotImplementedError(NokhwaError, NotImplementedError):
    """The requested operation is not available."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"This operation is not implemented yet: {message}")