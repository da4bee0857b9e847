[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "caixapos"
version = "0.1.0"
description = "A small console point-of-sale till: stock, cart, checkout with VAT and printed receipts."
requires-python = ">=3.10"
dependencies = []
keywords = ["point-of-sale", "till", "stock", "receipt", "console", "vat"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Portuguese",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
caixapos = "caixapos.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["caixapos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
