"""Reconciliación de hidrógenos tras cada edición de la molécula.

Cada función recibe una instantánea ya editada (átomo creado, enlace
formado, eliminado o con tipo cambiado) y devuelve otra en la que los
átomos afectados tienen el número de hidrógenos que pide su valencia.
Ninguna función lanza excepciones: los IDs desconocidos y los elementos
sin valencia objetivo devuelven la instantánea sin cambios.
"""

from __future__ import annotations

import logging

from molcore.model import HYDROGEN, Atom, IdFactory, Molecule, new_id
from molcore.valence_table import best_valence_for_bond_count
from valence.bonds import bond_order_sum
from valence.hydrogens import connected_hydrogens, required_hydrogen_count
from valence.placement import place_hydrogens

LOG = logging.getLogger(__name__)


def add_hydrogens_to_atom(
    atom: Atom,
    molecule: Molecule,
    id_factory: IdFactory = new_id,
) -> Molecule:
    """Completa con H la valencia de un átomo recién creado.

    Args:
        atom: Átomo ya presente en `molecule`.
        molecule: Instantánea que contiene el átomo.
        id_factory: Generador de IDs para los H nuevos.

    Returns:
        Nueva instantánea con los H necesarios colocados en modo simple.
    """
    current = molecule.find_atom(atom.id)
    if current is None:
        return molecule
    needed = required_hydrogen_count(current, molecule.bonds)
    return place_hydrogens(current, molecule, needed, id_factory=id_factory)


def remove_excess_hydrogens(atom_id: str, molecule: Molecule) -> Molecule:
    """Quita los H sobrantes de un átomo que acaba de ganar un enlace.

    Se eliminan `min(exceso, H existentes)` hidrógenos, los primeros en el
    orden de `connected_hydrogens`, junto con sus enlaces. Nunca añade H.
    """
    atom = molecule.find_atom(atom_id)
    if atom is None:
        return molecule

    current = bond_order_sum(atom_id, molecule.bonds)
    target = best_valence_for_bond_count(atom.element, current)
    if target is None:
        return molecule

    hydrogens = connected_hydrogens(atom_id, molecule)
    to_remove = min(max(0, current - target), len(hydrogens))
    if to_remove <= 0:
        return molecule

    LOG.debug(f"Removing {to_remove} H from {atom.element} {atom_id} (bonds={current}, valence={target})")
    return molecule.without_atoms(h.id for h in hydrogens[:to_remove])


def update_hydrogens_after_bonding(source_id: str, target_id: str, molecule: Molecule) -> Molecule:
    """Ajusta los H de ambos extremos de un enlace recién formado."""
    updated = remove_excess_hydrogens(source_id, molecule)
    return remove_excess_hydrogens(target_id, updated)


def fill_missing_hydrogens(
    atom_id: str,
    molecule: Molecule,
    id_factory: IdFactory = new_id,
) -> Molecule:
    """Añade los H que le faltan a un átomo, evitando a sus vecinos.

    Solo se añaden H cuando `required_hydrogen_count` supera el número de H
    ya enlazados; en ese caso se colocan exactamente los de la diferencia.
    Nunca elimina H. Los átomos de hidrógeno se ignoran.

    Args:
        atom_id: Átomo que ha perdido un enlace.
        molecule: Instantánea posterior a la eliminación.
        id_factory: Generador de IDs para los H nuevos.

    Returns:
        Nueva instantánea con los H colocados en modo con colisiones.
    """
    atom = molecule.find_atom(atom_id)
    if atom is None or atom.element == HYDROGEN:
        return molecule
    required = required_hydrogen_count(atom, molecule.bonds)
    existing = len(connected_hydrogens(atom_id, molecule))
    if required <= existing:
        return molecule
    missing = required - existing
    LOG.debug(f"Adding {missing} H to {atom.element} {atom_id} (required={required}, existing={existing})")
    return place_hydrogens(atom, molecule, missing, avoid_neighbors=True, id_factory=id_factory)


def update_hydrogens_after_bond_removal(
    source_id: str,
    target_id: str,
    molecule: Molecule,
    id_factory: IdFactory = new_id,
) -> Molecule:
    """Rellena los H de ambos extremos de un enlace eliminado."""
    updated = fill_missing_hydrogens(source_id, molecule, id_factory=id_factory)
    return fill_missing_hydrogens(target_id, updated, id_factory=id_factory)


def update_hydrogens_after_bond_type_change(
    source_id: str,
    target_id: str,
    molecule: Molecule,
    id_factory: IdFactory = new_id,
) -> Molecule:
    """Reconstruye los H de ambos extremos tras cambiar el tipo de enlace.

    Para cada extremo pesado se eliminan todos sus H y después se vuelven a
    crear los necesarios en modo simple. Los H resultantes tienen siempre
    IDs y posiciones nuevos, aunque su número no cambie.

    Args:
        source_id: Primer extremo del enlace modificado.
        target_id: Segundo extremo del enlace modificado.
        molecule: Instantánea con el enlace ya cambiado.
        id_factory: Generador de IDs para los H nuevos.

    Returns:
        Nueva instantánea con los H reconstruidos.
    """
    updated = molecule
    for atom_id in (source_id, target_id):
        atom = updated.find_atom(atom_id)
        if atom is None or atom.element == HYDROGEN:
            continue
        stale = connected_hydrogens(atom_id, updated)
        updated = updated.without_atoms(h.id for h in stale)
        needed = required_hydrogen_count(atom, updated.bonds)
        LOG.debug(f"Rebuilding H on {atom.element} {atom_id}: {len(stale)} -> {needed}")
        updated = place_hydrogens(atom, updated, needed, id_factory=id_factory)
    return updated
