[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stratos"
version = "0.1.0"
description = "A simulated embedded kernel: periodic task scheduler, sensor manager, GPIO register model, socket API and a small printf"
requires-python = ">=3.10"
dependencies = []
keywords = ["kernel", "scheduler", "simulator", "embedded", "gpio", "printf"]
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
    "Topic :: System :: Operating System",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stratos-sim = "stratos.kernel:main"

[tool.hatch.build.targets.wheel]
packages = ["stratos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
