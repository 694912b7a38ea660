[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vcdtrace"
version = "0.1.0"
description = "Record signal values from a simulation and write them as a Value Change Dump (VCD) trace"
requires-python = ">=3.10"
dependencies = []
keywords = ["vcd", "value change dump", "waveform", "trace", "simulation", "hardware"]
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
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vcdtrace-signals = "vcdtrace.signals:main"

[tool.hatch.build.targets.wheel]
packages = ["vcdtrace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
