[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "railshot"
version = "0.1.0"
description = "Game logic for a rail shooter: cameras, characters, projectiles, enemies, scene flow, gamepad input and WAV parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "shooter", "collision", "camera", "wav", "gamepad", "scenes"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: First Person Shooters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["railshot"]

[tool.pytest.ini_options]
addopts = "-ra"
