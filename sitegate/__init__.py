"""sitegate: permission resolution for construction project management."""

__version__ = "0.3.0"
