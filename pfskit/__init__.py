"""Typed records, parsing helpers and formatters for Linux procfs and sysfs data."""

__version__ = "0.9.0"
__all__ = ["types", "numbers", "lines", "fmt_net", "fmt_system", "log", "menu"]