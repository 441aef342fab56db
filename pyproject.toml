[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "milvus-entity"
version = "0.1.0"
description = "Entity models for a vector database client: schemas, fields, columns, indexes, search parameters and row conversion."
requires-python = ">=3.10"
dependencies = []
keywords = ["vector database", "schema", "columns", "index", "embeddings"]
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
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["milvus_entity"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
