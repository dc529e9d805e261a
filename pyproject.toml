[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termgalaga"
version = "0.1.0"
description = "A small Galaga-style arcade shooter that runs in the terminal"
requires-python = ">=3.10"
keywords = ["galaga", "arcade", "terminal", "game", "shooter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
termgalaga = "termgalaga.app:main"

[tool.hatch.build.targets.wheel]
packages = ["termgalaga"]

[tool.pytest.ini_options]
addopts = "-ra"
