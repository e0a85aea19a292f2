"""A small 2D arena shooter with themed menus, screen fades and saved volume settings."""

__version__ = "0.1.0"