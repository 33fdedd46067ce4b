[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pyano"
version = "0.1.0"
description = "A composable, resource-efficient framework for building AI applications locally"
requires-python = ">=3.10"
keywords = ["llm", "agents", "llama.cpp", "embeddings", "chain", "completion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "httpx",
    "termcolor",
    "tqdm",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "respx",
]

[project.scripts]
pyano-pull = "pyano.pull:main"

[tool.hatch.build.targets.wheel]
packages = ["pyano"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
