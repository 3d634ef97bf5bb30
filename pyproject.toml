[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixelforge"
version = "0.1.0"
description = "A small CPU path tracer and triangle rasterizer built on numpy"
requires-python = ">=3.10"
keywords = ["rendering", "ray tracing", "path tracing", "rasterizer", "graphics", "framebuffer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pixelforge"]

[tool.pytest.ini_options]
addopts = "-ra"
