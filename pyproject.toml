[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "skirmish"
version = "0.1.0"
description = "A small 2D side-view arena shooter with menus, fades and themed UI, built on pygame."
requires-python = ">=3.10"
keywords = ["game", "arcade", "shooter", "pygame", "2d"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pygame",
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
skirmish = "skirmish.app:main"

[tool.hatch.build.targets.wheel]
packages = ["skirmish"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
