[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sclib"
version = "2.0.0"
description = "Small general-purpose building blocks: byte buffer, CRC-32C, min-heap, array, linked list and a one-shot condition."
requires-python = ">=3.10"
dependencies = []
keywords = ["buffer", "crc32c", "heap", "linked-list", "array", "condition", "data-structures"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sclib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
