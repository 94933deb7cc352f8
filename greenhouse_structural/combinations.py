# greenhouse_structural/combinations.py
"""
LOAD COMBINATIONS
=================

Code-defined factored load combinations. Each entry is pure data: a name,
the equation label, and a factor for every load kind. No computation
happens here; the member analysis multiplies the factors into the load
magnitudes.

Only one table, "LRFD" (ASCE 7 §2.3.1 strength combinations), is defined.
Other codes are added by putting another tuple into
EngineConfig.combination_tables.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from .errors import UnsupportedModelConfiguration
from .model import LoadKind


@dataclass(frozen=True)
class LoadCombination:
    """
    A factored load combination.

    Parameters:
    -----------
    id : str
        Short identifier (LC1, LC2, ...)
    name : str
        Display name, also used as the member's controlling load label
    equation : str
        Equation label as printed in the code
    factors : Mapping[LoadKind, float]
        Load factor per load kind; kinds not listed take 0.0
    type : str
        'strength' or 'stability'
    governing : bool
        Set on a copy after analysis when this combination controls at
        least one member
    """
    id: str
    name: str
    equation: str
    factors: Mapping[LoadKind, float] = field(default_factory=dict)
    type: str = 'strength'
    governing: bool = False

    def __post_init__(self):
        # Read-only view so a shared table entry cannot be edited in place
        object.__setattr__(self, 'factors', MappingProxyType(dict(self.factors)))

    def factor(self, kind: LoadKind) -> float:
        return float(self.factors.get(kind, 0.0))


def _lrfd(id: str, equation: str, dead: float, live: float = 0.0, snow: float = 0.0,
          wind: float = 0.0, type: str = 'strength') -> LoadCombination:
    # Equipment is permanent load and takes the dead load factor
    return LoadCombination(
        id=id,
        name=equation,
        equation=equation,
        factors={
            LoadKind.DEAD: dead,
            LoadKind.EQUIPMENT: dead,
            LoadKind.LIVE: live,
            LoadKind.SNOW: snow,
            LoadKind.WIND: wind,
        },
        type=type,
    )


LRFD_COMBINATIONS: Tuple[LoadCombination, ...] = (
    _lrfd('LC1', '1.4D', dead=1.4),
    _lrfd('LC2', '1.2D + 1.6L', dead=1.2, live=1.6),
    _lrfd('LC3', '1.2D + 1.6S', dead=1.2, snow=1.6),
    _lrfd('LC4', '1.2D + 1.0W', dead=1.2, wind=1.0),
    _lrfd('LC5', '0.9D + 1.0W', dead=0.9, wind=1.0, type='stability'),
)


def default_combination_tables() -> Dict[str, Tuple[LoadCombination, ...]]:
    return {'LRFD': LRFD_COMBINATIONS}


def load_combination_table(
    building_code: str,
    tables: Mapping[str, Sequence[LoadCombination]],
) -> List[LoadCombination]:
    """
    Select the load combination table for a building code.

    Raises:
        UnsupportedModelConfiguration: if no table is defined for the code
    """
    key = building_code.upper()
    if key not in tables:
        raise UnsupportedModelConfiguration(
            f"No load combination table for building code '{building_code}'. "
            f"Available: {sorted(tables)}",
            stage="load_combinations",
        )
    return list(tables[key])


def mark_governing(
    combinations: Iterable[LoadCombination],
    controlling_names: Iterable[str],
) -> List[LoadCombination]:
    """Return copies of the combinations with `governing` set for every controlling name."""
    controlling = set(controlling_names)
    return [replace(c, governing=c.name in controlling) for c in combinations]
