"""diskscope - Disk usage analysis with deletion-safety hints."""

__version__ = "0.1.0"
