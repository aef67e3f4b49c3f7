[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "besart"
version = "0.1.0"
description = "Core of an online art gallery shop: product catalogue, orders, bearer-token checks, password hashing and request validation."
requires-python = ">=3.10"
keywords = ["gallery", "shop", "orders", "products", "jwt", "bcrypt", "validation"]
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
]
dependencies = [
    "sqlalchemy>=2.0",
    "bcrypt>=4.0",
    "pyjwt>=2.8",
    "cryptography>=41.0",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[tool.hatch.build.targets.wheel]
packages = ["besart"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
