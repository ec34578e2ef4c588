[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "framekit"
version = "0.1.0"
description = "Frame-loop building blocks: string and path helpers, math, a frame timer, input state tracking, binary files and a small XML DOM"
requires-python = ">=3.10"
dependencies = []
keywords = ["framework", "utilities", "xml", "binary", "timer", "input"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Text Processing :: Markup :: XML",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["framekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
