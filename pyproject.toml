[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "perftracker"
version = "0.1.0"
description = "Run Lighthouse audits under URL-blocking scenarios, average the metrics and write summaries."
requires-python = ">=3.10"
dependencies = [
    "python-dotenv",
]
keywords = ["lighthouse", "web performance", "core web vitals", "audit", "trace"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Site Management",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
perftracker = "perftracker.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["perftracker"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
