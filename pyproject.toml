[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cbrng123"
version = "0.1.0"
description = "Counter-based random number generators (Threefry, AES) with a sequential engine wrapper"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "random",
    "rng",
    "counter-based",
    "threefry",
    "aes",
    "monte-carlo",
    "parallel",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cbrng123-demo = "cbrng123.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["cbrng123"]

[tool.hatch.build.targets.sdist]
include = ["cbrng123", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
