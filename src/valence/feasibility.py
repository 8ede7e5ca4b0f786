"""Comprobaciones de capacidad de valencia previas a una edición."""

from __future__ import annotations

import logging
from typing import Dict, List

from molcore.model import HYDROGEN, Molecule
from molcore.valence_table import can_accept_more_bonds, max_valence
from valence.bonds import bond_order_sum

LOG = logging.getLogger(__name__)


def _effective_bond_order_sum(atom_id: str, molecule: Molecule, displace_hydrogens: bool) -> int:
    total = bond_order_sum(atom_id, molecule.bonds)
    if not displace_hydrogens:
        return total
    for bond in molecule.bonds_of(atom_id):
        other = molecule.find_atom(bond.other(atom_id))
        if other is not None and other.element == HYDROGEN:
            total -= bond.order
    return total


def can_bond_atoms(
    source_id: str,
    target_id: str,
    molecule: Molecule,
    bond_order: int = 1,
    displace_hydrogens: bool = False,
) -> bool:
    """Indica si se puede formar un enlace sin superar la valencia máxima.

    Args:
        source_id: Primer extremo propuesto.
        target_id: Segundo extremo propuesto.
        molecule: Instantánea actual; no se modifica.
        bond_order: Orden del enlace propuesto.
        displace_hydrogens: No contar los enlaces a H, que la
            reconciliación posterior al enlace puede eliminar.

    Returns:
        `True` si ambos extremos existen, son distintos y admiten
        `bond_order` órdenes de enlace más.
    """
    source = molecule.find_atom(source_id)
    target = molecule.find_atom(target_id)
    if source is None or target is None or source_id == target_id:
        return False

    for atom in (source, target):
        current = _effective_bond_order_sum(atom.id, molecule, displace_hydrogens)
        if not can_accept_more_bonds(atom.element, current, bond_order):
            LOG.debug(f"Bond rejected: {atom.element} {atom.id} at {current} cannot take +{bond_order}")
            return False
    return True


def valence_violations(molecule: Molecule) -> List[str]:
    """Valida valencias máximas de todos los átomos.

    Calcula la suma de órdenes de enlace por átomo y reporta aquellos que
    superan la mayor valencia canónica de su elemento. Los elementos sin
    entrada en la tabla no se comprueban.

    Returns:
        Lista de IDs de átomos que exceden la valencia permitida, en el
        orden de `molecule.atoms`.
    """
    sums: Dict[str, int] = {atom.id: 0 for atom in molecule.atoms}
    for bond in molecule.bonds:
        if bond.source_id in sums:
            sums[bond.source_id] += bond.order
        if bond.target_id in sums:
            sums[bond.target_id] += bond.order

    errors: List[str] = []
    for atom in molecule.atoms:
        limit = max_valence(atom.element)
        if limit is None:
            continue
        if sums[atom.id] > limit:
            errors.append(atom.id)
    return errors
