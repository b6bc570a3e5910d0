[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tickplot"
version = "0.1.0"
description = "Nice axis tick labelling, axis scales and rendered-image comparison helpers for plotting."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["plot", "axis", "ticks", "labelling", "scale", "visualization", "image comparison"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tickplot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
