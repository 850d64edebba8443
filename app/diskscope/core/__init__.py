"""Core configuration, paths and theming."""
