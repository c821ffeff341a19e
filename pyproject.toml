[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "huffzip"
version = "0.1.0"
description = "Huffman compression of ASCII text files, with parallel jobs and a live progress board"
requires-python = ">=3.10"
dependencies = []
keywords = ["huffman", "compression", "archiving", "progress", "threads", "curses"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
huffzip = "huffzip.cli:main"

[tool.setuptools.packages.find]
include = ["huffzip*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
