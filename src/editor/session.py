"""Sesión de edición sobre instantáneas moleculares.

La sesión es la dueña de la instantánea actual: aplica cada acción del
usuario, delega en el motor de valencias la reconciliación de hidrógenos y
guarda las instantáneas anteriores para deshacer/rehacer. Como las
instantáneas son inmutables, deshacer consiste simplemente en recuperar la
anterior.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from molcore.errors import (
    DuplicateBondError,
    EditorError,
    UnknownAtomError,
    UnknownBondError,
    ValenceExceededError,
)
from molcore.model import HYDROGEN, Atom, Bond, BondType, IdFactory, Molecule, new_id
from valence.feasibility import can_bond_atoms
from valence.hydrogens import connected_hydrogens
from valence.reconcile import (
    add_hydrogens_to_atom,
    fill_missing_hydrogens,
    update_hydrogens_after_bond_removal,
    update_hydrogens_after_bond_type_change,
    update_hydrogens_after_bonding,
)
from editor.state import EditorState

LOG = logging.getLogger(__name__)

# Entrada de historial: (descripción de la acción, instantánea).
_HistoryEntry = Tuple[str, Molecule]


class EditorSession:
    """Aplica acciones de edición y mantiene el historial de instantáneas."""

    def __init__(
        self,
        molecule: Optional[Molecule] = None,
        state: Optional[EditorState] = None,
        id_factory: IdFactory = new_id,
    ) -> None:
        """Inicializa la sesión.

        Args:
            molecule: Instantánea inicial; vacía si no se indica.
            state: Preferencias de edición.
            id_factory: Generador de IDs para átomos y enlaces nuevos.
        """
        self._molecule = molecule if molecule is not None else Molecule()
        self.state = state if state is not None else EditorState()
        self._id_factory = id_factory
        self._undo_stack: List[_HistoryEntry] = []
        self._redo_stack: List[_HistoryEntry] = []

    @property
    def molecule(self) -> Molecule:
        return self._molecule

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def _commit(self, text: str, molecule: Molecule) -> None:
        self._undo_stack.append((text, self._molecule))
        if len(self._undo_stack) > self.state.undo_limit:
            del self._undo_stack[0]
        self._redo_stack.clear()
        self._molecule = molecule
        LOG.info(f"{text}: {len(molecule.atoms)} atoms, {len(molecule.bonds)} bonds")

    def _require_atom(self, atom_id: str) -> Atom:
        atom = self._molecule.find_atom(atom_id)
        if atom is None:
            raise UnknownAtomError(f"Unknown atom {atom_id}")
        return atom

    def _require_bond(self, bond_id: str) -> Bond:
        bond = self._molecule.find_bond(bond_id)
        if bond is None:
            raise UnknownBondError(f"Unknown bond {bond_id}")
        return bond

    def add_atom(self, x: float, y: float, element: Optional[str] = None) -> Atom:
        """Crea un átomo aislado y, si procede, sus H implícitos.

        Args:
            x: Coordenada X.
            y: Coordenada Y.
            element: Símbolo; por defecto `state.default_element`.

        Returns:
            El átomo creado.

        Side Effects:
            Sustituye la instantánea actual y registra la acción en el
            historial.
        """
        atom = Atom(
            id=self._id_factory(),
            element=element or self.state.default_element,
            x=float(x),
            y=float(y),
        )
        molecule = self._molecule.with_atoms([atom])
        if self.state.auto_hydrogens:
            molecule = add_hydrogens_to_atom(atom, molecule, id_factory=self._id_factory)
        self._commit("Add atom", molecule)
        return atom

    def add_bond(
        self,
        source_id: str,
        target_id: str,
        bond_type: Optional[BondType] = None,
    ) -> Bond:
        """Forma un enlace entre dos átomos existentes.

        Args:
            source_id: Primer extremo.
            target_id: Segundo extremo.
            bond_type: Tipo de enlace; por defecto `state.active_bond_type`.

        Returns:
            El enlace creado.

        Raises:
            UnknownAtomError: Si algún extremo no existe.
            EditorError: Si ambos extremos son el mismo átomo.
            DuplicateBondError: Si los átomos ya están enlazados.
            ValenceExceededError: Si el enlace supera la valencia máxima.
        """
        self._require_atom(source_id)
        self._require_atom(target_id)
        if source_id == target_id:
            raise EditorError("Cannot bond an atom to itself")
        if self._molecule.find_bond_between(source_id, target_id) is not None:
            raise DuplicateBondError(f"Atoms {source_id} and {target_id} are already bonded")

        bond = Bond(
            id=self._id_factory(),
            source_id=source_id,
            target_id=target_id,
            type=bond_type or self.state.active_bond_type,
        )
        if not can_bond_atoms(
            source_id,
            target_id,
            self._molecule,
            bond_order=bond.order,
            displace_hydrogens=self.state.auto_hydrogens,
        ):
            raise ValenceExceededError(f"Bond of order {bond.order} exceeds valence")

        molecule = self._molecule.with_bonds([bond])
        if self.state.auto_hydrogens:
            molecule = update_hydrogens_after_bonding(source_id, target_id, molecule)
        self._commit("Add bond", molecule)
        return bond

    def change_bond_type(self, bond_id: str, bond_type: BondType) -> Bond:
        """Cambia el tipo (y por tanto el orden) de un enlace existente.

        Raises:
            UnknownBondError: Si el enlace no existe.
            ValenceExceededError: Si el nuevo orden supera la valencia.
        """
        bond = self._require_bond(bond_id)
        if bond.type == bond_type:
            return bond
        updated = Bond(bond.id, bond.source_id, bond.target_id, bond_type)
        if updated.order > bond.order and not can_bond_atoms(
            bond.source_id,
            bond.target_id,
            self._molecule.without_bonds([bond_id]),
            bond_order=updated.order,
            displace_hydrogens=self.state.auto_hydrogens,
        ):
            raise ValenceExceededError(f"Bond of order {updated.order} exceeds valence")

        molecule = self._molecule.replace_bond(bond_id, type=bond_type)
        if self.state.auto_hydrogens:
            molecule = update_hydrogens_after_bond_type_change(
                bond.source_id, bond.target_id, molecule, id_factory=self._id_factory
            )
        self._commit("Change bond", molecule)
        return updated

    def remove_bond(self, bond_id: str) -> None:
        bond = self._require_bond(bond_id)
        molecule = self._molecule.without_bonds([bond_id])
        if self.state.auto_hydrogens:
            molecule = update_hydrogens_after_bond_removal(
                bond.source_id, bond.target_id, molecule, id_factory=self._id_factory
            )
        self._commit("Remove bond", molecule)

    def remove_atom(self, atom_id: str) -> None:
        """Elimina un átomo, sus enlaces y los H que colgaban de él.

        Los vecinos pesados recuperan los H que les falten. Al borrar un
        hidrógeno no se repone ninguno.

        Raises:
            UnknownAtomError: Si el átomo no existe.
        """
        atom = self._require_atom(atom_id)
        removed = [atom_id]
        if atom.element != HYDROGEN:
            removed.extend(h.id for h in connected_hydrogens(atom_id, self._molecule))
        neighbor_ids = [
            other.id
            for other in self._molecule.neighbors(atom_id)
            if other.element != HYDROGEN and other.id != atom_id
        ]
        molecule = self._molecule.without_atoms(removed)
        if self.state.auto_hydrogens and atom.element != HYDROGEN:
            for neighbor_id in dict.fromkeys(neighbor_ids):
                molecule = fill_missing_hydrogens(neighbor_id, molecule, id_factory=self._id_factory)
        self._commit("Remove atom", molecule)

    def undo(self) -> bool:
        """Recupera la instantánea anterior; `False` si no hay historial."""
        if not self._undo_stack:
            return False
        text, previous = self._undo_stack.pop()
        self._redo_stack.append((text, self._molecule))
        self._molecule = previous
        LOG.info(f"Undo {text}")
        return True

    def redo(self) -> bool:
        if not self._redo_stack:
            return False
        text, following = self._redo_stack.pop()
        self._undo_stack.append((text, self._molecule))
        self._molecule = following
        LOG.info(f"Redo {text}")
        return True
