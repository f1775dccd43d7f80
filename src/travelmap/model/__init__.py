"""Data model for located entities and clusters."""

from .base import Cluster, EntityStatus, LocatedEntity, Position

__all__ = ["Cluster", "EntityStatus", "LocatedEntity", "Position"]
