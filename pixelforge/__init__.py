"""CPU rendering: framebuffer drawing, post-processing, ray tracing and rasterization."""

__version__ = "0.1.0"