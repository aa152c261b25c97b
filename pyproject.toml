[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dlxcover"
version = "0.1.0"
description = "Exact cover solving with dancing links, with N-Queens and Sudoku solvers"
requires-python = ">=3.10"
dependencies = []
keywords = ["exact cover", "dancing links", "algorithm x", "sudoku", "n-queens"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dlx-nqueens = "dlxcover.nqueens:main"
dlx-sudoku = "dlxcover.sudoku:main"

[tool.hatch.build.targets.wheel]
packages = ["dlxcover"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
