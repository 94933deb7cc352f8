# File: tests/test_advisor.py
"""
Test the optimization advisor rules.
"""

import pytest

from greenhouse_structural.advisor import generate_optimization_suggestions
from greenhouse_structural.analysis import analyze_members
from greenhouse_structural.combinations import LRFD_COMBINATIONS
from greenhouse_structural.loads import generate_load_conditions
from greenhouse_structural.members import build_members


def analyzed(model, site, materials):
    members, _ = analyze_members(
        build_members(model, materials).members,
        LRFD_COMBINATIONS,
        generate_load_conditions(model, site),
        model.dimensions.height,
    )
    return members


def test_over_designed_members_get_section_suggestions(greenhouse, site, materials):
    members = analyzed(greenhouse, site, materials)
    optimization = generate_optimization_suggestions(members)

    section = {s.member: s for s in optimization.suggestions if s.type == 'section'}
    light = [m for m in members if m.results.utilization < 0.6]
    assert light
    assert set(section) == {m.id for m in light}

    for member in light:
        s = section[member.id]
        assert s.potential_savings == pytest.approx(member.weight * 2.5 * 0.2)
        assert s.weight_reduction == pytest.approx(member.weight * 0.15)


def test_heavy_steel_frame_gets_material_suggestion(greenhouse, site, materials):
    members = analyzed(greenhouse, site, materials)
    steel_weight = sum(m.weight for m in members)
    assert steel_weight > 1000.0

    material = [s for s in generate_optimization_suggestions(members).suggestions if s.type == 'material']
    assert len(material) == 1
    assert material[0].weight_reduction == pytest.approx(0.15 * steel_weight)
    assert material[0].potential_savings == pytest.approx(0.15 * steel_weight * 2.5)
    assert material[0].performance_improvement == 20.0


def test_long_span_gets_configuration_suggestion(greenhouse, site, materials, make_component):
    assert not [s for s in generate_optimization_suggestions(analyzed(greenhouse, site, materials)).suggestions
                if s.type == 'configuration']  # 30 ft is not over the limit

    long_span = greenhouse.model_copy(update={'frame': [make_component("long", length_ft=40.0)]})
    configuration = [s for s in generate_optimization_suggestions(analyzed(long_span, site, materials)).suggestions
                     if s.type == 'configuration']
    assert len(configuration) == 1
    assert configuration[0].potential_savings == 5000.0
    assert configuration[0].weight_reduction == 500.0


def test_no_members_no_suggestions():
    optimization = generate_optimization_suggestions([])
    assert optimization.suggestions == []
    assert optimization.total_savings == 0.0
