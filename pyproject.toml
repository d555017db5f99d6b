[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hierroute"
version = "0.1.0"
description = "Shortest paths on road-like graphs: Dijkstra, distance matrices and Contraction Hierarchies"
requires-python = ">=3.10"
dependencies = []
keywords = ["shortest path", "dijkstra", "contraction hierarchies", "routing", "distance matrix", "graph"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hierroute"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
