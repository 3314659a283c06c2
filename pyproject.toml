[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bgvcrypt"
version = "0.1.0"
description = "A small leveled BGV homomorphic encryption scheme over polynomial rings"
requires-python = ">=3.10"
dependencies = []
keywords = ["bgv", "homomorphic encryption", "lattice", "rlwe", "lwe", "cryptography"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bgvcrypt-demo = "bgvcrypt.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bgvcrypt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
