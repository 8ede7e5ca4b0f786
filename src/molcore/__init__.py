"""API pública del modelo molecular de molvalence.

Reexpone las clases base del modelo y la tabla de valencias para facilitar
importaciones.
"""

from molcore.model import (
    BOND_ORDER,
    ELEMENTS,
    HYDROGEN,
    Atom,
    Bond,
    BondType,
    Molecule,
    new_id,
)
from molcore.valence_table import (
    VALENCE_TABLE,
    best_valence_for_bond_count,
    can_accept_more_bonds,
    canonical_valences,
    max_valence,
)

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "BOND_ORDER",
    "ELEMENTS",
    "HYDROGEN",
    "Molecule",
    "new_id",
    "VALENCE_TABLE",
    "best_valence_for_bond_count",
    "can_accept_more_bonds",
    "canonical_valences",
    "max_valence",
]
