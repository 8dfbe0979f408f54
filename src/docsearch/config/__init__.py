"""Configuration management."""

from docsearch.config.settings import Settings

__all__ = ["Settings"]
