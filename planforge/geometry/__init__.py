"""Planar geometry primitives."""

from planforge.geometry.aabb import Aabb

__all__ = ["Aabb"]
