[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gapedit"
version = "0.1.8"
description = "Gap buffer text storage with an incremental line index, editor command parsing and a modal command line"
requires-python = ">=3.10"
dependencies = []
keywords = ["editor", "gap buffer", "text", "line index", "command palette", "clipboard"]
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
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["gapedit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
