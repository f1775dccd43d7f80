"""Traveler filters applied before clustering."""

from .traveler import FilterValues, filter_entities

__all__ = ["FilterValues", "filter_entities"]
