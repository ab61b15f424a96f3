[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shrs"
version = "0.0.2"
description = "A framework for building and configuring your own interactive shell"
requires-python = ">=3.11"
dependencies = []
keywords = ["shell", "posix", "repl", "job-control", "framework"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
shrs = "shrs.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["shrs"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
