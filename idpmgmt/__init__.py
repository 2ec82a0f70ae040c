"""Python client for the identity provider Management API."""
from .core.management import Management

__version__ = "0.1.0"

__all__ = ["Management", "__version__"]
