"""Contabilidad de órdenes de enlace por átomo."""

from __future__ import annotations

from typing import Iterable

from molcore.model import Bond


def bond_order_sum(atom_id: str, bonds: Iterable[Bond]) -> int:
    """Suma los órdenes de enlace de todos los enlaces que tocan un átomo.

    Args:
        atom_id: Identificador del átomo.
        bonds: Enlaces de la instantánea.

    Returns:
        Suma de órdenes (0 si no hay enlaces). Un autoenlace degenerado
        cuenta dos veces, una por cada extremo.
    """
    total = 0
    for bond in bonds:
        if bond.source_id == atom_id:
            total += bond.order
        if bond.target_id == atom_id:
            total += bond.order
    return total
