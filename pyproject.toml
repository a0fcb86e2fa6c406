[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cyberdom"
version = "0.1.0"
description = "Script conditions, clothing inventory and assignment tracking for scripted session games"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "simulation", "script", "assignments", "clothing", "ini"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cyberdom"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
