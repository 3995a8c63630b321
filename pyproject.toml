[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fineprint"
version = "0.1.0"
description = "Track changes to company policy documents: text diffs, archived snapshots, ToS;DR lookups and LLM-written change summaries."
requires-python = ">=3.10"
keywords = ["diff", "unified-diff", "terms-of-service", "privacy-policy", "web-archive", "email"]
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
    "Topic :: Communications :: Email",
    "Topic :: Text Processing",
]
dependencies = [
    "requests>=2.28",
    "html5lib>=1.1",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["fineprint"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
