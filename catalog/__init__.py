"""Book catalog core: configuration, persistence, pagination and seeding."""

__version__ = "1.0.0"
