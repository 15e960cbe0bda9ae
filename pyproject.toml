[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hermes_agent"
version = "0.6.7"
description = "Core building blocks for a tool-using LLM chat agent: messages, stream parsing, context compression, skill commands, local tools and retries."
requires-python = ">=3.10"
keywords = ["llm", "agent", "chat", "tools", "streaming", "compression"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["hermes_agent"]

[tool.pytest.ini_options]
addopts = "-ra"
