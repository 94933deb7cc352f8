# File: tests/test_members.py
"""
Test the structural member builder: role assignment, section lookup,
material defaults and the skip-with-diagnostic behaviour.
"""

import pytest

from greenhouse_structural.catalog import STEEL_SECTIONS, rectangular_section
from greenhouse_structural.config import EngineConfig
from greenhouse_structural.errors import ComputationDomainError, MaterialNotFoundError
from greenhouse_structural.members import (
    BoundaryCondition,
    build_member,
    build_members,
    determine_member_role,
    is_supported,
)
from greenhouse_structural.model import Fixity, GreenhouseModel, MemberRole


def test_role_tag_wins_over_name(make_component):
    component = make_component("c1", name="corner post", role=MemberRole.TRUSS)
    assert determine_member_role(component) == MemberRole.TRUSS


@pytest.mark.parametrize("name, role", [
    ("corner post", MemberRole.COLUMN),
    ("ridge beam", MemberRole.BEAM),
    ("roof truss", MemberRole.TRUSS),
    ("purlin", MemberRole.BEAM),
])
def test_role_falls_back_to_name(make_component, name, role):
    assert determine_member_role(make_component("c1", name=name)) == role


def test_build_member_from_section_table(make_component, materials):
    member = build_member(make_component("beam-1"), materials, 10.0, EngineConfig())

    assert member.id == "member-beam-1"
    assert member.component_id == "beam-1"
    assert member.length == pytest.approx(20.0)
    assert member.length_in == pytest.approx(240.0)
    assert member.tributary_width == pytest.approx(10.0)
    assert member.section is STEEL_SECTIONS['W12X26']
    assert member.material.yield_strength == 36000.0
    assert member.end_point.x == pytest.approx(240.0)
    assert member.results is None


def test_weight_is_area_times_length_times_density(make_component, materials):
    member = build_member(make_component("beam-1"), materials, 10.0, EngineConfig())
    # 7.65 in² × 240 in × 490 pcf / 1728
    assert member.weight == pytest.approx(7.65 * 240.0 * 490.0 / 1728.0)


def test_bounding_box_section_when_not_in_table(make_component, materials):
    component = make_component("b1", section_name="W99X999", width=2.0, height=4.0)
    member = build_member(component, materials, 10.0, EngineConfig())

    expected = rectangular_section(2.0, 4.0)
    assert member.section == expected
    assert member.section.area == pytest.approx(8.0)
    assert member.section.ix == pytest.approx(2.0 * 4.0 ** 3 / 12.0)
    assert member.section.sx == pytest.approx(expected.ix / 2.0)


def test_missing_material_properties_fall_back_to_steel(make_component, materials):
    member = build_member(
        make_component("a1", material_id="aluminum-6061"), materials, 10.0, EngineConfig(),
    )
    assert member.material.elastic_modulus == 29e6
    assert member.material.density == 490.0


def test_tributary_width_override(make_component, materials):
    component = make_component("b1", tributary_width=4.0)
    assert build_member(component, materials, 10.0, EngineConfig()).tributary_width == 4.0


def test_missing_material_raises(make_component, materials):
    with pytest.raises(MaterialNotFoundError, match="unobtainium"):
        build_member(make_component("x", material_id="unobtainium"), materials, 10.0, EngineConfig())


def test_zero_length_rejected(make_component, materials):
    with pytest.raises(ComputationDomainError, match="length"):
        build_member(make_component("x", length_ft=0.0), materials, 10.0, EngineConfig())


def test_zero_area_rejected(make_component, materials):
    component = make_component("x", section_name=None, width=0.0, height=4.0)
    with pytest.raises(ComputationDomainError):
        build_member(component, materials, 10.0, EngineConfig())


def test_unstable_ends_rejected(make_component, materials):
    component = make_component("x", start_fixity=Fixity.PINNED, end_fixity=Fixity.FREE)
    with pytest.raises(ComputationDomainError, match="stable"):
        build_member(component, materials, 10.0, EngineConfig())


def test_supported_fixity_pairs():
    assert is_supported(Fixity.PINNED, Fixity.PINNED)
    assert is_supported(Fixity.FIXED, Fixity.FREE)
    assert is_supported(Fixity.ROLLER, Fixity.PINNED)
    assert not is_supported(Fixity.FREE, Fixity.FREE)
    assert not is_supported(Fixity.ROLLER, Fixity.FREE)


def test_boundary_condition_flags():
    fixed = BoundaryCondition.from_fixity(Fixity.FIXED)
    pinned = BoundaryCondition.from_fixity(Fixity.PINNED)
    assert fixed.rotation.z and fixed.translation.y
    assert pinned.translation.y and not pinned.rotation.z


def test_build_members_skips_bad_components(greenhouse, make_component, materials):
    model = greenhouse.model_copy(update={'frame': greenhouse.frame + [
        make_component("ghost", material_id="unobtainium"),
        make_component("stub", length_ft=0.0),
    ]})

    result = build_members(model, materials)

    assert [m.component_id for m in result.members] == ["beam-1", "beam-2", "post-1", "truss-1"]
    errors = {d.component_id: d.error for d in result.diagnostics}
    assert errors == {"ghost": "MaterialNotFoundError", "stub": "ComputationDomainError"}


def test_strict_members_reraises_domain_errors(greenhouse, make_component, materials):
    model = greenhouse.model_copy(update={'frame': [make_component("stub", length_ft=0.0)]})
    with pytest.raises(ComputationDomainError):
        build_members(model, materials, EngineConfig(strict_members=True))


def test_empty_frame_builds_nothing(materials):
    model = GreenhouseModel(id="empty", dimensions={'length': 20.0, 'width': 10.0})
    result = build_members(model, materials)
    assert result.members == []
    assert result.diagnostics == []
