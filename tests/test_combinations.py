# File: tests/test_combinations.py
"""
Test the LRFD combination table and its selection by building code.
"""

import pytest

from greenhouse_structural.combinations import (
    LRFD_COMBINATIONS,
    LoadCombination,
    load_combination_table,
    mark_governing,
)
from greenhouse_structural.config import EngineConfig
from greenhouse_structural.errors import UnsupportedModelConfiguration
from greenhouse_structural.model import LoadKind


def test_lrfd_table_contents():
    names = [c.name for c in LRFD_COMBINATIONS]
    assert names == ['1.4D', '1.2D + 1.6L', '1.2D + 1.6S', '1.2D + 1.0W', '0.9D + 1.0W']

    lc2 = LRFD_COMBINATIONS[1]
    assert lc2.factor(LoadKind.DEAD) == 1.2
    assert lc2.factor(LoadKind.LIVE) == 1.6
    assert lc2.factor(LoadKind.SNOW) == 0.0
    assert lc2.factor(LoadKind.SEISMIC) == 0.0

    assert LRFD_COMBINATIONS[-1].type == 'stability'
    assert not any(c.governing for c in LRFD_COMBINATIONS)


def test_equipment_takes_dead_load_factor():
    for combination in LRFD_COMBINATIONS:
        assert combination.factor(LoadKind.EQUIPMENT) == combination.factor(LoadKind.DEAD)


def test_factors_are_read_only():
    with pytest.raises(TypeError):
        LRFD_COMBINATIONS[0].factors[LoadKind.DEAD] = 2.0


def test_table_selection_is_case_insensitive():
    tables = EngineConfig().combination_tables
    assert load_combination_table('lrfd', tables) == list(LRFD_COMBINATIONS)


def test_unknown_building_code_raises():
    with pytest.raises(UnsupportedModelConfiguration, match="EUROCODE"):
        load_combination_table('EUROCODE', EngineConfig().combination_tables)


def test_custom_table_via_config():
    asd = (LoadCombination('A1', 'D + L', 'D + L', {LoadKind.DEAD: 1.0, LoadKind.LIVE: 1.0}),)
    config = EngineConfig(building_code='ASD', combination_tables={'ASD': asd})
    assert load_combination_table(config.building_code, config.combination_tables) == list(asd)


def test_mark_governing_returns_copies():
    marked = mark_governing(LRFD_COMBINATIONS, ['1.2D + 1.6S', '1.2D + 1.6S', '1.4D'])

    assert [c.governing for c in marked] == [True, False, True, False, False]
    # shared table untouched
    assert not any(c.governing for c in LRFD_COMBINATIONS)
