[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sailnav"
version = "0.1.0"
description = "Waypoint navigation, tacking and servo control for an autonomous sailing boat"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = [
    "sailing",
    "navigation",
    "autonomous",
    "gps",
    "compass",
    "servo",
    "waypoint",
    "tacking",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sailnav-sim = "sailnav.simulation:main"

[tool.hatch.build.targets.wheel]
packages = ["sailnav"]

[tool.pytest.ini_options]
addopts = "-ra"
