[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "carpilot"
version = "0.1.0"
description = "HTTP controller for a small serial-driven robot car with language-model motion planning, chat and weather endpoints"
requires-python = ">=3.10"
keywords = ["robot", "car", "serial", "flask", "planner", "telemetry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "requests",
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
carpilot = "carpilot.main:main"

[tool.hatch.build.targets.wheel]
packages = ["carpilot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
