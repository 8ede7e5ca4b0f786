"""Tabla estática de valencias canónicas por elemento.

La tabla se carga una sola vez y es de solo lectura durante toda la vida
del proceso. Responde dos consultas: qué valencia objetivo corresponde a un
átomo según la suma actual de órdenes de enlace y si el átomo admite más
órdenes de enlace.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from molcore.model import HYDROGEN

# Valencias canónicas, en orden creciente.
# Se incluyen estados hipervalentes habituales en dibujos:
# - P(V): fosfatos, fosforanos
# - S(IV/VI): sulfóxidos, sulfonas, sulfatos
# - Cl/Br/I(III/V/VII): interhalógenos y oxoácidos
VALENCE_TABLE: Mapping[str, Tuple[int, ...]] = MappingProxyType({
    "C": (4,),
    "N": (3,),
    "O": (2,),
    "P": (3, 5),
    "S": (2, 4, 6),
    "F": (1,),
    "Cl": (1, 3, 5, 7),
    "Br": (1, 3, 5, 7),
    "I": (1, 3, 5, 7),
    "H": (1,),
})

# Elementos con capacidad de enlace pero sin H implícitos.
_NO_IMPLICIT_HYDROGENS = frozenset({HYDROGEN})


def canonical_valences(element: str) -> Tuple[int, ...]:
    """Valencias aceptadas para `element`; tupla vacía si no hay entrada."""
    return VALENCE_TABLE.get(element, ())


def max_valence(element: str) -> Optional[int]:
    valences = canonical_valences(element)
    if not valences:
        return None
    return valences[-1]


def best_valence_for_bond_count(element: str, current: int) -> Optional[int]:
    """Elige la valencia objetivo para una suma de órdenes de enlace.

    Args:
        element: Símbolo del elemento.
        current: Suma actual de órdenes de enlace del átomo.

    Returns:
        La menor valencia canónica `>= current` o, si ninguna lo es, la
        mayor. `None` si el elemento no tiene política de H implícitos
        (sin entrada en la tabla, o hidrógeno).
    """
    if element in _NO_IMPLICIT_HYDROGENS:
        return None
    valences = canonical_valences(element)
    if not valences:
        return None
    for valence in valences:
        if valence >= current:
            return valence
    return valences[-1]


def can_accept_more_bonds(element: str, current: int, additional: int = 1) -> bool:
    """Indica si un átomo admite `additional` órdenes de enlace más.

    Los elementos sin entrada en la tabla no tienen límite de capacidad.
    """
    limit = max_valence(element)
    if limit is None:
        return True
    return current + additional <= limit
