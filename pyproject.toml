[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simeis"
version = "0.1.0"
description = "A space trading and mining game engine with aiohttp HTTP JSON endpoints"
requires-python = ">=3.10"
keywords = ["game", "simulation", "space", "trading", "http-api", "aiohttp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Intended Audience :: Education",
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
dependencies = [
    "aiohttp",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["simeis"]

[tool.pytest.ini_options]
addopts = "-ra"
