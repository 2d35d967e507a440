[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "duotris"
version = "0.1.0"
description = "Two-player side-by-side falling-block puzzle game for the terminal"
requires-python = ">=3.10"
dependencies = []
keywords = ["tetris", "game", "terminal", "two-player", "puzzle"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
duotris = "duotris.game:main"

[tool.hatch.build.targets.wheel]
packages = ["duotris"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
