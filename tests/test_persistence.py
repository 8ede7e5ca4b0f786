"""Pruebas unitarias para test_persistence."""

import json
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from molcore.errors import MoleculeFormatError
from molcore.model import Atom, Bond, BondType, Molecule
from molio.persistence import PersistenceManager
from valence.reconcile import add_hydrogens_to_atom


def _methanol():
    carbon = Atom("c1", "C", 0.0, 0.0)
    oxygen = Atom("o1", "O", 40.0, 0.0)
    molecule = Molecule([carbon, oxygen], [Bond("co", "c1", "o1", BondType.WEDGE)])
    molecule = add_hydrogens_to_atom(carbon, molecule)
    return add_hydrogens_to_atom(oxygen, molecule)


def test_file_roundtrip(tmp_path):
    """Verifica file roundtrip.

    Returns:
        None.

    """
    molecule = _methanol()
    path = tmp_path / "methanol.json"

    PersistenceManager.save_to_file(str(path), molecule)
    restored = PersistenceManager.load_from_file(str(path))

    assert restored == molecule
    assert json.loads(path.read_text(encoding="utf-8"))["application"] == "molvalence"


def test_bond_type_serialized_by_value():
    data = PersistenceManager.save_to_dict(_methanol())
    assert data["molecule"]["bonds"][0]["type"] == "wedge"


def test_rejects_foreign_document():
    with pytest.raises(MoleculeFormatError):
        PersistenceManager.load_from_dict({"application": "Chemuson", "molecule": {}})


def test_rejects_dangling_bond():
    """Verifica rejects dangling bond.

    Returns:
        None.

    """
    data = PersistenceManager.save_to_dict(Molecule([Atom("c1", "C", 0.0, 0.0)]))
    data["molecule"]["bonds"].append({"id": "b1", "source_id": "c1", "target_id": "ghost"})
    with pytest.raises(MoleculeFormatError):
        PersistenceManager.load_from_dict(data)


def test_rejects_unknown_bond_type_and_missing_fields():
    data = PersistenceManager.save_to_dict(_methanol())
    data["molecule"]["bonds"][0]["type"] = "quadruple"
    with pytest.raises(ValueError):
        PersistenceManager.load_from_dict(data)

    data = PersistenceManager.save_to_dict(_methanol())
    del data["molecule"]["atoms"][0]["element"]
    with pytest.raises(MoleculeFormatError):
        PersistenceManager.load_from_dict(data)


@pytest.mark.parametrize(
    "molecule_data",
    [
        ["not", "a", "dict"],
        {"atoms": ["c1"], "bonds": []},
        {"atoms": [{"id": "c1", "element": "C", "x": None, "y": 0.0}], "bonds": []},
        {"atoms": [], "bonds": [42]},
    ],
)
def test_malformed_structure_raises_format_error(molecule_data):
    """Verifica malformed structure raises format error.

    Returns:
        None.

    """
    data = {"application": "molvalence", "version": "0.1.0", "molecule": molecule_data}
    with pytest.raises(MoleculeFormatError):
        PersistenceManager.load_from_dict(data)


def test_non_dict_document_is_rejected():
    with pytest.raises(MoleculeFormatError):
        PersistenceManager.load_from_dict(["molvalence"])
