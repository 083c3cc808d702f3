import pytest

from archsolids.families import PROFILE_SCALES, TrimFamilyProvider, build_aranea_family
from archsolids.utils.error_handling import TrimFamilyNotFoundError


def test_aranea_profiles_scale_from_the_trim_unit(families, kernel):
    family = families.build_trim_family('aranea', unit_height=0.2, unit_depth=0.1)

    assert family.name == 'aranea'
    for size, scale in PROFILE_SCALES.items():
        profile = family.crown.get(size)
        assert profile.is_valid
        assert kernel.measure_dimensions(profile) == pytest.approx([0.1 * scale, 0.2 * scale])
        # profiles are centred on the origin
        assert profile.bounds[0] == pytest.approx(-profile.bounds[2])


def test_unknown_profile_size(families):
    family = families.build_trim_family('aranea', 1.0, 1.0)

    with pytest.raises(KeyError):
        family.crown.get('huge')


def test_cuboid_moulding_footprint(kernel):
    family = build_aranea_family(kernel, unit_height=1.0, unit_depth=1.0)
    frame = family.cuboid_moulding([4, 4], kernel.rectangle([1, 1]))

    assert frame.is_watertight
    assert frame.extents == pytest.approx([4, 4, 1])
    assert frame.volume == pytest.approx(16 - 4)


def test_cuboid_moulding_with_crown_profile(families):
    family = families.build_trim_family('aranea', unit_height=0.2, unit_depth=0.2)
    frame = family.cuboid_moulding([10, 6, 99], family.crown.extra_small)

    assert frame.is_watertight
    assert frame.volume > 0
    assert frame.extents == pytest.approx([10, 6, 0.2])
    assert frame.bounds[0][2] == pytest.approx(0.0)


def test_linear_moulding(families):
    family = families.build_trim_family('aranea', unit_height=0.3, unit_depth=0.2)
    run = family.linear_moulding(5, family.crown.small)

    assert run.extents == pytest.approx([5, 0.3, 0.45])
    assert run.bounds[0][0] == pytest.approx(0.0)
    assert run.bounds[0][2] == pytest.approx(0.0)


def test_unknown_family_raises(families):
    with pytest.raises(TrimFamilyNotFoundError):
        families.build_trim_family('doric', 1.0, 1.0)

    with pytest.raises(KeyError):
        families.build_trim_family('doric', 1.0, 1.0)


def test_with_family_returns_a_new_provider(families):
    extended = families.with_family('plain', build_aranea_family)

    assert extended is not families
    assert extended.family_names == ['aranea', 'plain']
    assert families.family_names == ['aranea']
    assert extended.kernel is families.kernel
    assert extended.build_trim_family('plain', 1.0, 1.0).unit_height == 1.0


def test_provider_registry_is_read_only():
    provider = TrimFamilyProvider()

    with pytest.raises(TypeError):
        provider._registry['other'] = build_aranea_family
