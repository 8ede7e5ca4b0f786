"""Persistencia de instantáneas moleculares en archivos JSON.

Este módulo serializa y deserializa una `Molecule` completa (átomos,
enlaces y tipos de enlace) para poder guardar y reabrir un dibujo.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from molcore.errors import MoleculeFormatError
from molcore.model import Atom, Bond, BondType, Molecule

LOG = logging.getLogger(__name__)

APPLICATION = "molvalence"


class PersistenceManager:
    """Gestiona el guardado y carga de documentos JSON de molvalence."""

    VERSION = "0.1.0"

    @staticmethod
    def save_to_dict(molecule: Molecule) -> Dict[str, Any]:
        """Serializa una molécula en un diccionario.

        Args:
            molecule: Instantánea a guardar.

        Returns:
            Diccionario serializable con la cabecera y el modelo.

        Side Effects:
            No tiene efectos laterales.
        """
        atoms_data = [
            {"id": atom.id, "element": atom.element, "x": atom.x, "y": atom.y}
            for atom in molecule.atoms
        ]
        bonds_data = [
            {
                "id": bond.id,
                "source_id": bond.source_id,
                "target_id": bond.target_id,
                "type": bond.type.value,
            }
            for bond in molecule.bonds
        ]
        return {
            "application": APPLICATION,
            "version": PersistenceManager.VERSION,
            "molecule": {"atoms": atoms_data, "bonds": bonds_data},
        }

    @staticmethod
    def load_from_dict(data: Dict[str, Any]) -> Molecule:
        """Reconstruye una molécula desde un diccionario.

        Args:
            data: Diccionario de estado (resultado de `save_to_dict`).

        Returns:
            La instantánea restaurada.

        Raises:
            MoleculeFormatError: Si el documento no es de molvalence, su
                estructura no es la esperada, un enlace usa un tipo
                desconocido o apunta a un átomo que no existe.
        """
        if not isinstance(data, dict) or data.get("application") != APPLICATION:
            raise MoleculeFormatError("Not a valid molvalence file")

        model_data = data.get("molecule", {})
        try:
            atoms = [
                Atom(
                    id=str(atom_d["id"]),
                    element=str(atom_d["element"]),
                    x=float(atom_d["x"]),
                    y=float(atom_d["y"]),
                )
                for atom_d in model_data.get("atoms", [])
            ]
            bonds = [
                Bond(
                    id=str(bond_d["id"]),
                    source_id=str(bond_d["source_id"]),
                    target_id=str(bond_d["target_id"]),
                    type=BondType(bond_d.get("type", "single")),
                )
                for bond_d in model_data.get("bonds", [])
            ]
        except KeyError as exc:
            raise MoleculeFormatError(f"Missing field {exc}") from exc
        except ValueError as exc:
            raise MoleculeFormatError(str(exc)) from exc
        except (TypeError, AttributeError) as exc:
            raise MoleculeFormatError(f"Malformed molecule data: {exc}") from exc

        atom_ids = {atom.id for atom in atoms}
        for bond in bonds:
            if bond.source_id not in atom_ids or bond.target_id not in atom_ids:
                raise MoleculeFormatError(f"Bond {bond.id} references a missing atom")

        return Molecule(atoms, bonds)

    @staticmethod
    def save_to_file(filepath: str, molecule: Molecule) -> None:
        """Guarda una molécula en un archivo JSON.

        Args:
            filepath: Ruta de destino.
            molecule: Instantánea a serializar.

        Side Effects:
            Escribe en disco el archivo indicado.
        """
        data = PersistenceManager.save_to_dict(molecule)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        LOG.info(f"Saved {len(molecule.atoms)} atoms to {filepath}")

    @staticmethod
    def load_from_file(filepath: str) -> Molecule:
        """Carga un archivo JSON y devuelve la molécula que contiene."""
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        molecule = PersistenceManager.load_from_dict(data)
        LOG.info(f"Loaded {len(molecule.atoms)} atoms from {filepath}")
        return molecule
