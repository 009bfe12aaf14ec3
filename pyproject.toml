[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nwpemu"
version = "0.1.0"
description = "Numerical weather prediction model emulator that generates synthetic field data from a YAML configuration"
requires-python = ">=3.10"
keywords = [
    "weather",
    "nwp",
    "emulator",
    "synthetic-data",
    "meteorology",
    "testing",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Atmospheric Science",
    "Topic :: Software Development :: Testing",
]
dependencies = [
    "numpy",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
nwpemu = "nwpemu.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["nwpemu"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
