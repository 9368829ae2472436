"""Scoring rules that turn ranked ballots into points and results."""

from .base import ScoringSystem

__all__ = ["ScoringSystem"]
