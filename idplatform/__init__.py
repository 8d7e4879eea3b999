"""Identity platform services: demographic validation and UI spec management."""

__version__ = "1.0.0"
