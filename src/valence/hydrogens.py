"""Resolución de hidrógenos enlazados y cálculo de H requeridos."""

from __future__ import annotations

from typing import Iterable, List

from molcore.model import HYDROGEN, Atom, Bond, Molecule
from molcore.valence_table import best_valence_for_bond_count
from valence.bonds import bond_order_sum


def connected_hydrogens(atom_id: str, molecule: Molecule) -> List[Atom]:
    """Obtiene los hidrógenos unidos directamente a un átomo.

    Args:
        atom_id: Identificador del átomo central.
        molecule: Instantánea a consultar.

    Returns:
        Lista de átomos H sin repetir (por ID), en el mismo orden en que
        aparecen en `molecule.atoms`.
    """
    candidate_ids = set()
    for bond in molecule.bonds:
        other_id = bond.other(atom_id)
        if other_id is not None:
            candidate_ids.add(other_id)
    return [
        atom
        for atom in molecule.atoms
        if atom.id in candidate_ids and atom.element == HYDROGEN
    ]


def required_hydrogen_count(atom: Atom, bonds: Iterable[Bond]) -> int:
    """Calcula cuántos H simples necesita un átomo para su valencia.

    La suma de órdenes incluye los enlaces a H ya presentes. Tras perder un
    enlace, quien llama compara el resultado con el número de H existentes
    y solo añade la diferencia cuando el primero es mayor.

    Args:
        atom: Átomo a evaluar.
        bonds: Enlaces de la instantánea.

    Returns:
        `max(0, objetivo - actual)`, o 0 si el elemento no tiene valencia
        objetivo (p. ej., el propio hidrógeno).
    """
    current = bond_order_sum(atom.id, bonds)
    target = best_valence_for_bond_count(atom.element, current)
    if target is None:
        return 0
    return max(0, target - current)
