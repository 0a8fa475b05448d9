[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gitodb"
version = "2.0.0"
description = "Read and write Git blob and commit objects in loose-object and in-memory stores"
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "objects", "object-database", "zlib", "version-control"]
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
    "Topic :: Software Development :: Version Control :: Git",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gitodb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
