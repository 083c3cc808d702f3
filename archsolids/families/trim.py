"""
Trim families for archsolids.
Supplies moulding cross-section profiles and assembles them into linear and
rectangular-frame mouldings.
"""

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Sequence

import numpy as np
import trimesh
from shapely.geometry import Polygon

from ..geometry import GeometryKernel
from ..utils.error_handling import TrimFamilyNotFoundError

logger = logging.getLogger(__name__)

# Scale of each named size relative to one trim unit
PROFILE_SCALES = {
    'extra_small': 1.0,
    'small': 1.5,
    'medium': 2.0,
    'large': 3.0,
}


@dataclass(frozen=True)
class ProfileSet:
    """Named sizes of one moulding profile."""
    extra_small: Polygon
    small: Polygon
    medium: Polygon
    large: Polygon

    def get(self, size: str) -> Polygon:
        if size not in PROFILE_SCALES:
            raise KeyError(f"Unknown profile size: {size!r}")
        return getattr(self, size)


@dataclass(frozen=True)
class TrimFamily:
    """A named set of moulding profiles and the assemblers that use them."""
    name: str
    unit_height: float
    unit_depth: float
    crown: ProfileSet
    kernel: GeometryKernel

    def cuboid_moulding(self, size: Sequence[float], profile: Polygon) -> trimesh.Trimesh:
        """
        Run a profile around a rectangle with mitred corners.

        The profile's +X side faces outward and its lowest point sits on
        Z = 0. The outer footprint of the frame equals ``size[:2]``.

        Args:
            size: [x, y] outer footprint; a third component is ignored
            profile: Moulding cross-section

        Returns:
            Closed frame solid centred on the origin in X and Y
        """
        aligned = self.kernel.align(profile, ['min', 'min'])
        depth, _ = self.kernel.measure_dimensions(aligned)
        points = np.asarray(aligned.exterior.coords)[:-1]

        half_x = size[0] / 2 - depth
        half_y = size[1] / 2 - depth
        loops = []
        for offset, height in points:
            ring_x = half_x + offset
            ring_y = half_y + offset
            loops.append([
                (-ring_x, -ring_y, height),
                (ring_x, -ring_y, height),
                (ring_x, ring_y, height),
                (-ring_x, ring_y, height),
            ])

        return self.kernel.from_loops(loops)

    def linear_moulding(self, length: float, profile: Polygon) -> trimesh.Trimesh:
        """Run a profile straight along +X for ``length``, base at Z = 0."""
        run = self.kernel.extrude_linear(profile, length)
        return self.kernel.align(
            self.kernel.rotate(run, [math.pi / 2, 0, math.pi / 2]),
            ['min', 'center', 'min']
        )


def _crown_points(depth: float, height: float, segments: int = 8):
    """Outline of a cove crown moulding with its back face on X = 0."""
    points = [(0.0, 0.0), (0.3 * depth, 0.0), (0.3 * depth, 0.2 * height)]
    for step in range(1, segments + 1):
        t = (math.pi / 2) * step / segments
        points.append((
            0.3 * depth + 0.7 * depth * (1 - math.cos(t)),
            0.2 * height + 0.65 * height * math.sin(t)
        ))
    points.extend([(depth, height), (0.0, height)])
    return points


def build_aranea_family(kernel: GeometryKernel,
                        unit_height: float,
                        unit_depth: float) -> TrimFamily:
    """
    Build the aranea trim family.

    Profiles are centred on the origin; the extra small size measures one
    trim unit deep and one unit high.
    """
    def crown(scale: float) -> Polygon:
        outline = kernel.region_from_points(_crown_points(unit_depth * scale, unit_height * scale))
        return kernel.align(outline, ['center', 'center'])

    return TrimFamily(
        name='aranea',
        unit_height=unit_height,
        unit_depth=unit_depth,
        crown=ProfileSet(**{size: crown(scale) for size, scale in PROFILE_SCALES.items()}),
        kernel=kernel
    )


FamilyFactory = Callable[[GeometryKernel, float, float], TrimFamily]

DEFAULT_FAMILIES: Mapping[str, FamilyFactory] = MappingProxyType({
    'aranea': build_aranea_family,
})


class TrimFamilyProvider:
    """Read-only registry of trim families keyed by family id."""

    def __init__(self,
                 kernel: Optional[GeometryKernel] = None,
                 registry: Optional[Mapping[str, FamilyFactory]] = None):
        """
        Initialize the provider.

        Args:
            kernel: Geometry kernel handed to family factories
            registry: Family id to factory mapping, defaults to the bundled families
        """
        self._kernel = kernel or GeometryKernel()
        self._registry: Mapping[str, FamilyFactory] = MappingProxyType(
            dict(DEFAULT_FAMILIES if registry is None else registry)
        )

    @property
    def kernel(self) -> GeometryKernel:
        return self._kernel

    @property
    def family_names(self):
        return sorted(self._registry)

    def with_family(self, name: str, factory: FamilyFactory) -> 'TrimFamilyProvider':
        """Return a provider that also knows ``name``."""
        registry: Dict[str, FamilyFactory] = dict(self._registry)
        registry[name] = factory
        return TrimFamilyProvider(self._kernel, registry)

    def build_trim_family(self, name: str,
                          unit_height: float,
                          unit_depth: float) -> TrimFamily:
        """
        Build the trim family ``name`` for the given unit dimensions.

        Raises:
            TrimFamilyNotFoundError: If ``name`` is not registered
        """
        if name not in self._registry:
            raise TrimFamilyNotFoundError(
                f"Unknown trim family {name!r}; available: {', '.join(self.family_names)}"
            )
        logger.debug(f"Building trim family {name} (unit height {unit_height}, unit depth {unit_depth})")
        return self._registry[name](self._kernel, unit_height, unit_depth)
