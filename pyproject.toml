[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flexcat"
version = "2.18.0"
description = "Build IFF catalogs, catalog translation files and program sources from catalog data"
requires-python = ">=3.10"
dependencies = []
keywords = ["catalog", "localization", "translation", "iff", "locale"]
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
    "Topic :: Software Development :: Localization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flexcat"]

[tool.pytest.ini_options]
addopts = "-ra"
