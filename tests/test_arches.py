import math

import numpy as np
import pytest

from archsolids.builders import Unsupported, is_supported, one_pt_arch, two_pt_arch
from archsolids.geometry import is_region
from archsolids.utils.error_handling import ArchGeometryError


def test_one_pt_arch_region_is_a_half_disc(builders):
    region = builders.arches.one_pt_arch({'arcRadius': 3})

    assert is_region(region)
    assert region.bounds == pytest.approx((-3, 0, 3, 3))
    assert region.area == pytest.approx(math.pi * 9 / 2, rel=1e-2)


def test_one_pt_arch_solid_stands_on_the_ground(builders, rect_profile):
    solid = builders.arches.one_pt_arch({'arc_radius': 3}, rect_profile)

    assert not is_region(solid)
    assert solid.is_watertight
    assert solid.volume > 0
    assert solid.extents == pytest.approx([6.5, 0.4, 3.25], rel=1e-3)
    assert solid.bounds[0][2] == pytest.approx(0.0, abs=1e-6)
    assert solid.bounds[0][0] == pytest.approx(-solid.bounds[1][0])


def test_two_pt_arch_region_spans_arch_width(builders):
    region = builders.arches.two_pt_arch({'arcRadius': 3, 'archWidth': 4})

    min_x, min_y, max_x, max_y = region.bounds
    assert max_x - min_x == pytest.approx(4.0)
    assert min_x == pytest.approx(-2.0)
    assert min_y == pytest.approx(0.0)
    # arcs meet above the centre line at sqrt(r^2 - m^2)
    assert max_y == pytest.approx(math.sqrt(8), rel=1e-2)


def test_two_pt_arch_defaults_to_a_semicircle(builders):
    pointed = builders.arches.two_pt_arch({'arcRadius': 2})
    round_arch = builders.arches.one_pt_arch({'arcRadius': 2})

    assert pointed.area == pytest.approx(round_arch.area, rel=1e-6)
    assert pointed.bounds == pytest.approx(round_arch.bounds, abs=1e-9)


def test_two_pt_arch_rejects_width_beyond_diameter(builders):
    with pytest.raises(ArchGeometryError):
        builders.arches.two_pt_arch({'arcRadius': 2, 'archWidth': 5})

    with pytest.raises(ValueError):
        two_pt_arch({'arcRadius': 2, 'archWidth': 4.5})


def test_two_pt_arch_solid_width(builders, rect_profile):
    solid = builders.arches.two_pt_arch({'arcRadius': 3, 'archWidth': 4}, rect_profile)

    assert solid.volume > 0
    # arch width plus the profile width on each side
    assert solid.extents[0] == pytest.approx(5.0, rel=1e-3)
    assert solid.extents[1] == pytest.approx(0.4, rel=1e-3)
    assert solid.bounds[0][2] == pytest.approx(0.0, abs=1e-6)
    assert np.mean(solid.bounds[:, 0]) == pytest.approx(0.0, abs=1e-6)


def test_two_pt_arch_profile_wider_than_the_half_span(builders, kernel):
    # mirror axis at 4.5 leaves 0.5 of the span on each side of the 2 wide profile
    solid = builders.arches.two_pt_arch({'arcRadius': 5, 'archWidth': 1}, kernel.rectangle([2, 0.4]))

    assert solid.extents[0] == pytest.approx(5.0, rel=1e-3)
    assert solid.extents[1] == pytest.approx(0.4, rel=1e-3)
    assert np.mean(solid.bounds[:, 0]) == pytest.approx(0.0, abs=1e-6)


def test_two_pt_arch_half_keeps_only_the_outer_side(builders, kernel):
    half = builders.arches.two_pt_arch_half({'arcRadius': 5, 'archWidth': 1}, kernel.rectangle([2, 0.4]))

    assert half.bounds[0][0] == pytest.approx(4.5, abs=1e-6)
    assert half.bounds[1][0] == pytest.approx(7.0, abs=1e-6)


def test_two_pt_arch_is_twice_its_half(builders, rect_profile):
    params = {'arcRadius': 3, 'archWidth': 4}
    half = builders.arches.two_pt_arch_half(params, rect_profile)
    solid = builders.arches.two_pt_arch(params, rect_profile)

    assert solid.volume == pytest.approx(2 * half.volume, rel=1e-3)


def test_two_pt_arch_is_repeatable(builders, rect_profile):
    params = {'arcRadius': 3, 'archWidth': 4}
    first = builders.arches.two_pt_arch(params, rect_profile)
    second = builders.arches.two_pt_arch(params, rect_profile)

    assert second.bounds == pytest.approx(first.bounds)
    assert second.volume == pytest.approx(first.volume)


def test_narrower_arch_is_lower_for_the_same_radius(builders, rect_profile):
    narrow = builders.arches.two_pt_arch({'arcRadius': 3, 'archWidth': 3}, rect_profile)
    wide = builders.arches.two_pt_arch({'arcRadius': 3, 'archWidth': 6}, rect_profile)

    assert narrow.extents[2] < wide.extents[2]
    assert narrow.extents[0] < wide.extents[0]


@pytest.mark.parametrize('method', ['three_pt_arch', 'four_pt_arch'])
def test_multi_centre_arches_are_reserved(builders, rect_profile, method):
    build = getattr(builders.arches, method)

    for profile in (None, rect_profile):
        result = build({'arcRadius': 3}, profile)
        assert isinstance(result, Unsupported)
        assert not result
        assert not is_supported(result)
        assert result.feature == method


def test_convenience_function_builds_with_default_kernel():
    region = one_pt_arch({'arcRadius': 1.5})

    assert is_supported(region)
    assert region.bounds[2] == pytest.approx(1.5)
