[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mddkit"
version = "0.1.0"
description = "Device-driver helpers: CAN payload bit packing, a minimal serial packager, process priority, real-time synchronization and small utilities"
requires-python = ">=3.10"
keywords = ["can", "real-time", "serial", "packager", "device-drivers", "simulation"]
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
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mddkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
