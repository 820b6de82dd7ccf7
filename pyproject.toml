[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "habicat"
version = "0.87.0"
description = "Surface complexity metrics for triangle meshes: per-triangle layers, jittered grid averaging and RUG file output"
requires-python = ">=3.10"
dependencies = []
keywords = ["mesh", "rugosity", "complexity", "habitat", "3d", "jitter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["habicat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
