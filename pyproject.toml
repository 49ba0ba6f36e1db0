[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "laser_guidance"
version = "0.1.0"
description = "Laser guidance building blocks: DAC8568 galvo command encoding, galvo waveforms, aiming logic, runtime control and overlay text."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "laser",
    "galvo",
    "dac8568",
    "guidance",
    "tracking",
    "spi",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Scientific/Engineering :: Image Recognition",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["laser_guidance"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
