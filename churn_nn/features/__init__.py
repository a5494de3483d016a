"""Feature encoding module."""

from .encoder import FeatureEncoder, Partition

__all__ = ["FeatureEncoder", "Partition"]
