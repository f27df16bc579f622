[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smartroad"
version = "0.1.0"
description = "A four-way intersection traffic simulation where cars negotiate right of way without traffic lights"
requires-python = ">=3.10"
keywords = ["simulation", "traffic", "intersection", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
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
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
smartroad = "smartroad.app:main"

[tool.hatch.build.targets.wheel]
packages = ["smartroad"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
