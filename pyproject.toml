[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "toolhive"
version = "0.1.0"
description = "Encrypted secret storage, local state storage, JSON-RPC message handling and update checks for MCP server tooling"
requires-python = ">=3.10"
keywords = ["mcp", "model-context-protocol", "json-rpc", "secrets", "aes-gcm", "state"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["toolhive"]

[tool.hatch.build.targets.sdist]
include = ["toolhive", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
