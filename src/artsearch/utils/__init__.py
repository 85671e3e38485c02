from .names import format_name

__all__ = ["format_name"]
