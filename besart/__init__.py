"""Art gallery shop core: product and order services, token checks, hashing and validation."""

__version__ = "0.1.0"