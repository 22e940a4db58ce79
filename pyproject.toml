[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "embee"
version = "0.1.0"
description = "A small transformer inference engine with model format detection, byte-level tokenization and nucleus sampling"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["transformer", "inference", "llm", "sampling", "tokenizer"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
embee-chat = "embee.chat_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["embee"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
