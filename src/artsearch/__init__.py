"""Query construction and result normalization for the item catalogue search."""

__version__ = "0.1.0"
