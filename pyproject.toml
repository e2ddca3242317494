[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vmsim"
version = "0.1.0"
description = "A hierarchical page-table virtual memory simulator with swap-based page eviction"
requires-python = ">=3.10"
dependencies = []
keywords = ["virtual memory", "paging", "page table", "simulator", "operating systems"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vmsim = "vmsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["vmsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
