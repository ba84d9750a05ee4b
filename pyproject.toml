[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fileserve"
version = "0.1.0"
description = "A small TCP server that lets clients list, create, rewrite, rename, move and delete files under a root directory"
requires-python = ">=3.10"
dependencies = []
keywords = ["file server", "tcp", "remote files", "filesystem"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fileserve = "fileserve.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fileserve"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
