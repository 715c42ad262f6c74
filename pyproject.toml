[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geecache"
version = "0.1.0"
description = "A small distributed in-memory cache with LRU eviction, consistent hashing and request coalescing over HTTP."
requires-python = ">=3.10"
dependencies = []
keywords = ["cache", "distributed", "lru", "consistent-hashing", "singleflight", "http", "wsgi"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
geecache-demo = "geecache.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["geecache"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
