"""slicegen -- CRUD feature-module scaffolder with an in-memory table store."""

__version__ = "0.1.0"
