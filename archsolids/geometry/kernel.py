"""
Geometry kernel for archsolids.
Wraps trimesh, shapely and manifold3d behind the planar, solid, transform,
boolean and measurement operations the builders are written against.
"""

import logging
import math
from functools import reduce
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import trimesh
from manifold3d import CrossSection, Manifold
from shapely import affinity
from shapely.geometry import Polygon
from shapely.geometry import box as shapely_box
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.ops import unary_union
from trimesh import transformations

logger = logging.getLogger(__name__)

Region = BaseGeometry
Solid = trimesh.Trimesh
Shape = Union[BaseGeometry, trimesh.Trimesh]

ALIGN_MODES = ('min', 'center', 'max')


def is_region(shape: Shape) -> bool:
    """Whether ``shape`` is a planar region rather than a solid."""
    return isinstance(shape, BaseGeometry)


class GeometryKernel:
    """
    Immutable set of geometry operations.

    Planar regions are shapely geometries, solids are ``trimesh.Trimesh``.
    Every operation returns a new value and leaves its inputs untouched.
    """

    def __init__(self,
                 segments: int = 48,
                 boolean_engine: str = 'manifold'):
        """
        Initialize the geometry kernel.

        Args:
            segments: Default number of segments for arcs and revolutions
            boolean_engine: trimesh boolean engine used for solids
        """
        self._segments = int(segments)
        self._boolean_engine = boolean_engine

    @property
    def segments(self) -> int:
        return self._segments

    @property
    def boolean_engine(self) -> str:
        return self._boolean_engine

    def __repr__(self) -> str:
        return f"GeometryKernel(segments={self._segments}, boolean_engine={self._boolean_engine!r})"

    # Planar paths and regions

    def arc(self, radius: float, end_angle: float,
            start_angle: float = 0.0,
            segments: Optional[int] = None) -> np.ndarray:
        """
        Build an open circular arc centred on the origin.

        Args:
            radius: Arc radius
            end_angle: End angle in radians
            start_angle: Start angle in radians
            segments: Number of straight segments along the arc

        Returns:
            (segments + 1, 2) array of points from start to end angle
        """
        count = self._segments if segments is None else int(segments)
        theta = np.linspace(start_angle, end_angle, count + 1)
        return np.column_stack((np.cos(theta), np.sin(theta))) * radius

    @staticmethod
    def close_path(points: Sequence[Sequence[float]]) -> np.ndarray:
        """Close a path by repeating its first point at the end."""
        points = np.asarray(points, dtype=np.float64)
        if len(points) and not np.allclose(points[0], points[-1]):
            points = np.vstack((points, points[:1]))
        return points

    @staticmethod
    def region_from_points(points: Sequence[Sequence[float]]) -> Polygon:
        """Build a filled, counter-clockwise region from an ordered point sequence."""
        points = np.asarray(points, dtype=np.float64)
        if len(points) > 1 and np.allclose(points[0], points[-1]):
            points = points[:-1]
        return orient(Polygon(points), sign=1.0)

    def triangle_sas(self, side_a: float, angle: float, side_b: float) -> Polygon:
        """
        Build a triangle from two sides and the angle between them.

        ``side_a`` runs along +X from the origin; ``side_b`` leaves the far
        end of ``side_a`` at ``angle`` measured inside the triangle.
        """
        apex = (side_a - side_b * math.cos(angle), side_b * math.sin(angle))
        return self.region_from_points([(0.0, 0.0), (side_a, 0.0), apex])

    @staticmethod
    def rectangle(size: Sequence[float], center: Sequence[float] = (0.0, 0.0)) -> Polygon:
        """Build an axis-aligned rectangle region."""
        half_x, half_y = size[0] / 2, size[1] / 2
        return orient(shapely_box(center[0] - half_x, center[1] - half_y,
                                  center[0] + half_x, center[1] + half_y), sign=1.0)

    # Solids

    @staticmethod
    def box(size: Sequence[float], center: Sequence[float] = (0.0, 0.0, 0.0)) -> trimesh.Trimesh:
        """Build an axis-aligned box of ``size`` centred on ``center``."""
        return trimesh.creation.box(
            extents=np.asarray(size, dtype=np.float64),
            transform=transformations.translation_matrix(np.asarray(center, dtype=np.float64))
        )

    def extrude_linear(self, profile: Polygon, height: float) -> trimesh.Trimesh:
        """Extrude a planar profile along +Z from zero to ``height``."""
        solid = Manifold.extrude(self._cross_section(profile), height)
        return self._from_manifold(solid)

    def extrude_rotate(self, profile: Polygon,
                       angle: float = 2 * math.pi,
                       segments: Optional[int] = None) -> trimesh.Trimesh:
        """
        Revolve a planar profile about the Z axis.

        Profile X is the distance from the axis, profile Y becomes Z. The
        sweep starts on +X and turns towards +Y.

        Args:
            profile: Profile region, expected on the positive X side
            angle: Sweep angle in radians
            segments: Number of slices across the sweep

        Returns:
            Revolved solid
        """
        count = self._segments if segments is None else int(segments)
        # manifold3d counts segments per full turn
        circular_segments = max(3, int(round(count * 2 * math.pi / angle)))
        solid = Manifold.revolve(
            self._cross_section(profile),
            circular_segments=circular_segments,
            revolve_degrees=math.degrees(angle)
        )
        return self._from_manifold(solid)

    def from_loops(self, loops: Sequence[Sequence[Sequence[float]]]) -> trimesh.Trimesh:
        """
        Build a closed solid by lofting a cyclic sequence of closed loops.

        Every loop must hold the same number of points. Loop ``i`` is joined
        to loop ``i + 1`` and the last loop back to the first.
        """
        loops = np.asarray(loops, dtype=np.float64)
        loop_count, loop_size = loops.shape[0], loops.shape[1]

        faces = []
        for i in range(loop_count):
            j = (i + 1) % loop_count
            for k in range(loop_size):
                k_next = (k + 1) % loop_size
                a, b = i * loop_size + k, i * loop_size + k_next
                c, d = j * loop_size + k_next, j * loop_size + k
                faces.append([a, b, c])
                faces.append([a, c, d])

        mesh = trimesh.Trimesh(vertices=loops.reshape(-1, 3), faces=np.asarray(faces))
        return self._outward(mesh)

    # Transforms

    def translate(self, shape: Shape, offset: Sequence[float]) -> Shape:
        """Translate a region or solid."""
        offset = list(offset) + [0.0] * (3 - len(offset))
        if is_region(shape):
            return affinity.translate(shape, xoff=offset[0], yoff=offset[1])
        return self._apply(shape, transformations.translation_matrix(offset[:3]))

    def rotate(self, shape: Shape, angles: Sequence[float]) -> Shape:
        """Rotate about the X, then Y, then Z axes through the origin."""
        angles = list(angles) + [0.0] * (3 - len(angles))
        matrix = transformations.euler_matrix(angles[0], angles[1], angles[2], 'sxyz')
        return self._apply(shape, matrix)

    def mirror(self, shape: Shape, normal: Sequence[float],
               origin: Sequence[float] = (0.0, 0.0, 0.0)) -> Shape:
        """Mirror across the plane through ``origin`` with the given normal."""
        normal = list(normal) + [0.0] * (3 - len(normal))
        origin = list(origin) + [0.0] * (3 - len(origin))
        matrix = transformations.reflection_matrix(origin, normal)
        mirrored = self._apply(shape, matrix)
        if is_region(mirrored):
            return mirrored
        return self._outward(mirrored)

    def align(self, shape: Shape,
              modes: Sequence[Optional[str]],
              relative_to: Optional[Sequence[float]] = None) -> Shape:
        """
        Move a shape so each axis meets the requested bounding-box extremum.

        Args:
            shape: Region or solid to move
            modes: Per-axis mode, one of 'min', 'center', 'max' or None to skip
            relative_to: Per-axis target coordinate, defaults to the origin

        Returns:
            Aligned copy of the shape
        """
        lower, upper = self.measure_bounds(shape)
        targets = list(relative_to) if relative_to is not None else []
        offset = [0.0, 0.0, 0.0]

        for axis, mode in enumerate(modes[:len(lower)]):
            if mode is None:
                continue
            if mode not in ALIGN_MODES:
                raise ValueError(f"Invalid align mode: {mode!r}")
            target = targets[axis] if axis < len(targets) and targets[axis] is not None else 0.0
            if mode == 'min':
                anchor = lower[axis]
            elif mode == 'max':
                anchor = upper[axis]
            else:
                anchor = (lower[axis] + upper[axis]) / 2
            offset[axis] = target - anchor

        return self.translate(shape, offset)

    # Booleans

    def union(self, *shapes: Union[Shape, Iterable[Shape]]) -> Shape:
        """Union two or more shapes."""
        shapes = self._flatten(shapes)
        if is_region(shapes[0]):
            return unary_union(shapes)
        if len(shapes) == 1:
            return shapes[0].copy()
        return trimesh.boolean.union(shapes, engine=self._boolean_engine)

    def subtract(self, base: Shape, *others: Union[Shape, Iterable[Shape]]) -> Shape:
        """Subtract every other shape from ``base``."""
        others = self._flatten(others)
        if is_region(base):
            return base.difference(unary_union(others))
        return trimesh.boolean.difference([base] + others, engine=self._boolean_engine)

    def intersect(self, base: Shape, *others: Union[Shape, Iterable[Shape]]) -> Shape:
        """Intersect ``base`` with every other shape."""
        others = self._flatten(others)
        if is_region(base):
            return reduce(lambda acc, other: acc.intersection(other), others, base)
        return trimesh.boolean.intersection([base] + others, engine=self._boolean_engine)

    # Measurement

    @staticmethod
    def measure_bounds(shape: Shape) -> Tuple[np.ndarray, np.ndarray]:
        """Lower and upper corners of the bounding box (2 or 3 components)."""
        if is_region(shape):
            min_x, min_y, max_x, max_y = shape.bounds
            return np.array([min_x, min_y]), np.array([max_x, max_y])
        bounds = np.asarray(shape.bounds, dtype=np.float64)
        return bounds[0], bounds[1]

    def measure_dimensions(self, shape: Shape) -> np.ndarray:
        """Bounding-box size of a region or solid."""
        lower, upper = self.measure_bounds(shape)
        return upper - lower

    # Internals

    @staticmethod
    def _flatten(shapes) -> List[Shape]:
        flat = []
        for shape in shapes:
            if isinstance(shape, (list, tuple)):
                flat.extend(shape)
            else:
                flat.append(shape)
        if not flat:
            raise ValueError("At least one shape is required")
        return flat

    @staticmethod
    def _apply(shape: Shape, matrix: np.ndarray) -> Shape:
        if is_region(shape):
            return affinity.affine_transform(shape, [
                matrix[0, 0], matrix[0, 1],
                matrix[1, 0], matrix[1, 1],
                matrix[0, 3], matrix[1, 3]
            ])
        transformed = shape.copy()
        transformed.apply_transform(matrix)
        return transformed

    @staticmethod
    def _outward(mesh: trimesh.Trimesh) -> trimesh.Trimesh:
        """Flip face winding of closed meshes whose normals point inward."""
        if mesh.is_watertight and mesh.volume < 0:
            mesh.invert()
        return mesh

    @staticmethod
    def _cross_section(profile: Polygon) -> CrossSection:
        profile = orient(profile, sign=1.0)
        contours = [profile.exterior] + list(profile.interiors)
        return CrossSection([
            [(float(x), float(y)) for x, y in list(ring.coords)[:-1]]
            for ring in contours
        ])

    def _from_manifold(self, solid: Manifold) -> trimesh.Trimesh:
        mesh = solid.to_mesh()
        vertices = np.asarray(mesh.vert_properties, dtype=np.float64)[:, :3]
        faces = np.asarray(mesh.tri_verts, dtype=np.int64)
        logger.debug(f"Converted manifold with {len(vertices)} vertices and {len(faces)} faces")
        return self._outward(trimesh.Trimesh(vertices=vertices, faces=faces))
