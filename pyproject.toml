[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corewar"
version = "0.1.0"
description = "A Core War virtual machine that pits compiled champions against each other in shared memory, with a console runner and a pygame window"
requires-python = ">=3.10"
keywords = ["corewar", "virtual machine", "simulation", "game", "champions"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
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
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
corewar = "corewar.cli:main"
corewar-visual = "corewar.visual:main"

[tool.hatch.build.targets.wheel]
packages = ["corewar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
