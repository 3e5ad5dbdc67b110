"""Camera capture building blocks: formats, format selection, controls, frame buffers, pixel conversion and backend interfaces."""

__version__ = "0.1.0"