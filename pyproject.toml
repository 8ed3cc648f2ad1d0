[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "katana"
version = "0.1.0"
description = "Crawling building blocks: scope rules, crawl queues, URL filters, endpoint extraction and result output"
requires-python = ">=3.10"
keywords = ["crawler", "spider", "scope", "web", "endpoints", "output"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Information Technology",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]
dependencies = [
    "pyyaml",
    "beautifulsoup4",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["katana"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
