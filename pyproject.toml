[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcms"
version = "0.1.0"
description = "Mesh coupling utilities: grid point search, reverse classification, message layouts and MLS/linear interpolation kernels"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["coupling", "mesh", "point search", "interpolation", "reverse classification"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pcms"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
