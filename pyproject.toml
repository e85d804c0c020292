[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "escapedb"
version = "0.1.0"
description = "JSON settings and an embedded SQLite-backed store for escape-room games and their events"
requires-python = ">=3.10"
dependencies = []
keywords = ["escape-room", "games", "persistence", "key-value", "sqlite", "settings"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
escapedb = "escapedb.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["escapedb"]

[tool.hatch.build.targets.sdist]
include = ["escapedb", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
