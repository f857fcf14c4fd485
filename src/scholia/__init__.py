"""scholia - commentary blocks with block-scoped footnotes."""

__version__ = "0.1.0"
