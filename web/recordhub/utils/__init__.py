"""
Shared helpers for the record API.
"""
from .base import Base

__all__ = ['Base']
