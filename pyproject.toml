[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ekit"
version = "0.1.0"
description = "Small utilities: typed value access, SQL column helpers, synchronisation primitives and more"
requires-python = ">=3.10"
keywords = [
    "utilities",
    "sync",
    "sql",
    "encryption",
    "json",
    "condition-variable",
    "atomic",
    "pool",
]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]
dependencies = [
    "numpy",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ekit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
