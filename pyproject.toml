[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tankbattle"
version = "0.1.0"
description = "A turn-based tank battle simulator on a wrapping board, with pluggable game managers, players and tank algorithms"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "simulation", "tanks", "turn-based", "toroidal-board"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tankbattle = "tankbattle.simulator:main"

[tool.hatch.build.targets.wheel]
packages = ["tankbattle"]

[tool.pytest.ini_options]
addopts = "-ra"
