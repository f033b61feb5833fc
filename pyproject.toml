[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "retrolite"
version = "1.4.0"
description = "Power supervisor, gamepad logic, fuel gauge driver and OSD state helpers for a handheld game console"
requires-python = ">=3.10"
dependencies = []
keywords = ["handheld", "gamepad", "joystick", "fuel-gauge", "max17055", "osd"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["retrolite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
