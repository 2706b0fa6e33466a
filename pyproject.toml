[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tokamaksim"
version = "0.1.0"
description = "Building blocks for a tokamak plasma simulation: magnetic field model, Boris push, D-T cross sections, particle store, spatial grid and run options"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tokamak",
    "plasma",
    "fusion",
    "boris-pusher",
    "simulation",
    "magnetic-field",
    "physics",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tokamaksim"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 120
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
