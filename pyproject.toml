[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fireflystack"
version = "0.1.0"
description = "Building blocks for local FireFly development stacks: Clique genesis files, keystore wallets, connector configs and compose services, and option validation"
requires-python = ">=3.10"
keywords = ["firefly", "ethereum", "docker-compose", "evmconnect", "ethconnect", "genesis", "keystore", "clique"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "pyyaml",
    "cryptography",
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
fireflystack = "fireflystack.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fireflystack"]

[tool.pytest.ini_options]
addopts = "-ra"
