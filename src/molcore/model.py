"""Modelos de datos inmutables del motor de valencias.

Este módulo concentra las estructuras que representan el grafo molecular
(átomos y enlaces). A diferencia de un grafo editable, cada `Molecule` es
una instantánea: toda operación de edición devuelve una instantánea nueva y
deja intacta la original, de modo que quien la invoque puede conservar o
descartar versiones anteriores libremente.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

# Conjunto fijo de elementos que ofrece el editor.
ELEMENTS: Tuple[str, ...] = ("C", "N", "O", "P", "S", "F", "Cl", "Br", "I", "H")

HYDROGEN = "H"

IdFactory = Callable[[], str]


def new_id() -> str:
    """Genera un identificador único (UUID4) para átomos y enlaces."""
    return str(uuid.uuid4())


class BondType(str, Enum):
    """Tipos de enlace que puede dibujar el usuario."""
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    WEDGE = "wedge"
    DASH = "dash"


# Orden de enlace por tipo. Cuña y trazos son enlaces simples con
# información estereoquímica solo de representación.
BOND_ORDER = {
    BondType.SINGLE: 1,
    BondType.DOUBLE: 2,
    BondType.TRIPLE: 3,
    BondType.WEDGE: 1,
    BondType.DASH: 1,
}


@dataclass(frozen=True)
class Atom:
    """Representa un átomo en el grafo molecular."""
    id: str
    element: str
    x: float
    y: float


@dataclass(frozen=True)
class Bond:
    """Representa un enlace químico entre dos átomos.

    El par (origen, destino) se guarda ordenado pero su semántica química
    es simétrica.
    """
    id: str
    source_id: str
    target_id: str
    type: BondType = BondType.SINGLE

    @property
    def order(self) -> int:
        return BOND_ORDER[self.type]

    def touches(self, atom_id: str) -> bool:
        return self.source_id == atom_id or self.target_id == atom_id

    def other(self, atom_id: str) -> Optional[str]:
        """Devuelve el extremo opuesto a `atom_id` o `None` si no lo toca."""
        if self.source_id == atom_id:
            return self.target_id
        if self.target_id == atom_id:
            return self.source_id
        return None


@dataclass(frozen=True)
class Molecule:
    """Instantánea inmutable de átomos y enlaces.

    Invariante: los extremos de cada enlace deben existir en `atoms`. El
    modelo no lo comprueba al leer; todas las operaciones que producen
    instantáneas nuevas lo preservan.
    """
    atoms: Tuple[Atom, ...] = field(default_factory=tuple)
    bonds: Tuple[Bond, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Se admiten listas en la construcción, pero se guardan como tuplas.
        object.__setattr__(self, "atoms", tuple(self.atoms))
        object.__setattr__(self, "bonds", tuple(self.bonds))

    def find_atom(self, atom_id: str) -> Optional[Atom]:
        """Busca un átomo por ID.

        Args:
            atom_id: Identificador del átomo.

        Returns:
            El átomo correspondiente o `None` si no existe.
        """
        for atom in self.atoms:
            if atom.id == atom_id:
                return atom
        return None

    def find_bond(self, bond_id: str) -> Optional[Bond]:
        """Busca un enlace por ID; `None` si no existe."""
        for bond in self.bonds:
            if bond.id == bond_id:
                return bond
        return None

    def find_bond_between(self, a1_id: str, a2_id: str) -> Optional[Bond]:
        """Busca un enlace existente entre dos átomos.

        Args:
            a1_id: ID del primer átomo.
            a2_id: ID del segundo átomo.

        Returns:
            El primer enlace que une ambos átomos, en cualquier sentido,
            o `None` en caso contrario.
        """
        for bond in self.bonds:
            if {bond.source_id, bond.target_id} == {a1_id, a2_id}:
                return bond
        return None

    def bonds_of(self, atom_id: str) -> List[Bond]:
        return [bond for bond in self.bonds if bond.touches(atom_id)]

    def neighbors(self, atom_id: str) -> List[Atom]:
        """Devuelve los átomos enlazados directamente a `atom_id`.

        Un vecino unido por enlaces paralelos aparece una vez por enlace.
        Los extremos que no existen en la instantánea se ignoran.
        """
        result: List[Atom] = []
        for bond in self.bonds:
            other_id = bond.other(atom_id)
            if other_id is None:
                continue
            other = self.find_atom(other_id)
            if other is not None:
                result.append(other)
        return result

    def with_atoms(self, atoms: Iterable[Atom]) -> "Molecule":
        """Devuelve una instantánea con `atoms` añadidos al final."""
        return Molecule(self.atoms + tuple(atoms), self.bonds)

    def with_bonds(self, bonds: Iterable[Bond]) -> "Molecule":
        """Devuelve una instantánea con `bonds` añadidos al final."""
        return Molecule(self.atoms, self.bonds + tuple(bonds))

    def without_atoms(self, atom_ids: Iterable[str]) -> "Molecule":
        """Elimina átomos y todos los enlaces conectados a ellos.

        Args:
            atom_ids: IDs de los átomos a excluir.

        Returns:
            Nueva instantánea sin los átomos ni sus enlaces; el orden
            relativo de lo que se conserva no cambia.
        """
        removed = set(atom_ids)
        if not removed:
            return self
        return Molecule(
            tuple(atom for atom in self.atoms if atom.id not in removed),
            tuple(
                bond
                for bond in self.bonds
                if bond.source_id not in removed and bond.target_id not in removed
            ),
        )

    def without_bonds(self, bond_ids: Iterable[str]) -> "Molecule":
        removed = set(bond_ids)
        if not removed:
            return self
        return Molecule(self.atoms, tuple(bond for bond in self.bonds if bond.id not in removed))

    def replace_bond(self, bond_id: str, **changes) -> "Molecule":
        """Sustituye un enlace por una copia con los campos indicados.

        Args:
            bond_id: Identificador del enlace.
            **changes: Campos de `Bond` a modificar (p. ej., `type`).

        Returns:
            Nueva instantánea; la misma si el enlace no existe.
        """
        if self.find_bond(bond_id) is None:
            return self
        return Molecule(
            self.atoms,
            tuple(replace(bond, **changes) if bond.id == bond_id else bond for bond in self.bonds),
        )
