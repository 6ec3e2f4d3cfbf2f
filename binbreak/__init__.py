"""binbreak: a terminal game about reading binary numbers quickly."""

__version__ = "0.3.0"
