[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "primkit"
version = "0.1.0"
description = "Recursive length prefix encoding, fixed-width integers and hashes, hex serialization and key-value store primitives."
requires-python = ">=3.10"
dependencies = []
keywords = ["rlp", "encoding", "uint", "hash", "hex", "key-value", "serialization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Typing :: Typed",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "jsonschema"]

[tool.hatch.build.targets.wheel]
packages = ["primkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
