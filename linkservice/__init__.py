"""Link service: shortens URLs to 10-character codes and resolves them back."""

__version__ = "1.0.0"
