[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "salesinsight"
version = "0.1.0"
description = "Load sales transactions from CSV files and serve aggregated summaries over a small JSON HTTP API."
requires-python = ">=3.10"
dependencies = []
keywords = ["sales", "analytics", "csv", "aggregation", "http", "json"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
salesinsight = "salesinsight.server:main"

[tool.hatch.build.targets.wheel]
packages = ["salesinsight"]

[tool.pytest.ini_options]
addopts = "-ra"
