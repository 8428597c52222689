"""Utility functions and helpers."""

from .masking import mask_password

__all__ = [
    'mask_password'
]
