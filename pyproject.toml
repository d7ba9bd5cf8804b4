[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "invi"
version = "0.1.0"
description = "Inventory items and stock records on SQLite, with schema-validated item metadata"
requires-python = ">=3.10"
dependencies = []
keywords = ["inventory", "stock", "sqlite", "schema", "validation"]
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
    "Topic :: Office/Business",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["invi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
