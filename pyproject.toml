[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dynsql"
version = "0.1.0"
description = "Stored SQL queries with declared, type-checked parameters, loaded from database tables and run through any DB-API connection"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "database", "dynamic query", "parameters", "validation", "db-api"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dynsql"]

[tool.pytest.ini_options]
addopts = "-ra"
