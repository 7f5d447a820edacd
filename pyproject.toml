[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stridespan"
version = "0.1.0"
description = "Strided multidimensional index mappings over flat sequences, with reference sum and add kernels"
requires-python = ">=3.10"
dependencies = []
keywords = ["strides", "layout", "multidimensional", "array", "indexing", "row-major", "column-major"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stridespan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
