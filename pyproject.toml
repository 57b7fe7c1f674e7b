[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "enlace"
version = "0.1.0"
description = "Small TCP nodes that exchange length-prefixed messages and packets, with config loading, logging and a toy dictionary."
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "sockets", "client-server", "serialization", "distributed", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
enlace = "enlace.nodes:main"
enlace-dictionary = "enlace.dictionary:main"

[tool.hatch.build.targets.wheel]
packages = ["enlace"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
