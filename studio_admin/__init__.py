"""Studio admin API client: request gateway, credential slots and REST resource wrappers."""

__version__ = "0.3.0"
