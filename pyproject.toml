[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "recomemento"
version = "1.0.0"
description = "A small HTTP API that stores books in SQLite and recommends one by genre and purpose"
requires-python = ">=3.10"
keywords = ["books", "recommendation", "rest", "api", "flask", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
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
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
recomemento = "recomemento.app:main"

[tool.hatch.build.targets.wheel]
packages = ["recomemento"]

[tool.pytest.ini_options]
addopts = "-ra"
