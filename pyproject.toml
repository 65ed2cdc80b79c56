[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "motorcarrier"
version = "0.1.0"
description = "Simulated motor carrier co-processor: fixed-point arithmetic, PID control, motors, encoders and battery monitoring"
requires-python = ">=3.10"
dependencies = []
keywords = ["motor", "pid", "fixed-point", "encoder", "battery", "simulation", "embedded"]
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
    "Topic :: Software Development :: Embedded Systems",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["motorcarrier"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
