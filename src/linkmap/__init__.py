"""linkmap: relationship resolution for persons, vehicles, properties and locations."""

__version__ = "0.1.0"
