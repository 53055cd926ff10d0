"""Async utilities: AsyncOption."""

from option_toolkit.async_.option import AsyncOption

__all__ = ['AsyncOption']
