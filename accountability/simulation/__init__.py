"""Sample data generation."""

from .generator import HistoryGenerator

__all__ = ['HistoryGenerator']
