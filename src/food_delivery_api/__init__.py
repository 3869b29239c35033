"""Food delivery REST API: customers, restaurants, menus and orders."""

__version__ = "1.0.0"
