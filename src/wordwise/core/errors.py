"""Base exception for WordWise."""

from __future__ import annotations


class WordWiseError(Exception):
    """Base error for everything raised by WordWise."""
