"""Utility helpers shared across sqldevlog."""

from sqldevlog.utils import logging

__all__ = ("logging",)
