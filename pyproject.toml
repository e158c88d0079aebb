[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orbitdrive"
version = "0.1.0"
description = "Two-dimensional orbital physics for a multiplayer rocket-and-rover game: planets, gravity, vehicles and a compact network protocol."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "gravity", "orbit", "rocket", "simulation", "multiplayer", "physics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["orbitdrive"]

[tool.hatch.build.targets.sdist]
include = ["orbitdrive", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
