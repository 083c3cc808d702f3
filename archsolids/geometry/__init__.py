"""
Geometry module for archsolids.
Contains the geometry kernel the builders compose shapes with.
"""

from .kernel import GeometryKernel, Region, Solid, Shape, is_region

__all__ = [
    'GeometryKernel',
    'Region',
    'Solid',
    'Shape',
    'is_region'
]
