"""Pruebas unitarias para test_placement."""

import itertools
import math
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from molcore.model import Atom, Bond, BondType, Molecule
from valence.geom import angle_distance_rad, angle_rad, normalize_angle_rad
from valence.placement import HYDROGEN_DISTANCE, collision_aware_angles, place_hydrogens, simple_angles


def _counter_ids(prefix="n"):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def _angles_of_new_hydrogens(parent, before, after):
    """Función de prueba auxiliar para angles of new hydrogens.

    Args:
        parent: Átomo padre.
        before: Instantánea previa.
        after: Instantánea resultante.

    Returns:
        Ángulos normalizados de los H añadidos.

    """
    new_atoms = after.atoms[len(before.atoms):]
    return [normalize_angle_rad(angle_rad((parent.x, parent.y), (a.x, a.y))) for a in new_atoms]


def test_three_hydrogens_at_thirds_of_a_turn():
    """Verifica three hydrogens at thirds of a turn.

    Returns:
        None.

    """
    parent = Atom("c1", "C", 10.0, -5.0)
    molecule = Molecule([parent])
    result = place_hydrogens(parent, molecule, 3, id_factory=_counter_ids())

    angles = _angles_of_new_hydrogens(parent, molecule, result)
    assert angles == pytest.approx([0.0, 2 * math.pi / 3, 4 * math.pi / 3], abs=1e-9)
    for atom in result.atoms[1:]:
        assert atom.element == "H"
        assert math.hypot(atom.x - parent.x, atom.y - parent.y) == pytest.approx(HYDROGEN_DISTANCE)


def test_simple_mode_spaces_few_hydrogens_as_three():
    assert simple_angles(1) == [0.0]
    assert simple_angles(2) == pytest.approx([0.0, 2 * math.pi / 3])
    assert simple_angles(4) == pytest.approx([0.0, math.pi / 2, math.pi, 3 * math.pi / 2])
    assert simple_angles(0) == []


def test_new_hydrogens_are_bonded_to_parent():
    """Verifica new hydrogens are bonded to parent.

    Returns:
        None.

    """
    parent = Atom("c1", "C", 0.0, 0.0)
    molecule = Molecule([parent])
    result = place_hydrogens(parent, molecule, 2, id_factory=_counter_ids())

    assert [a.id for a in result.atoms] == ["c1", "n1", "n3"]
    assert [(b.id, b.source_id, b.target_id) for b in result.bonds] == [
        ("n2", "c1", "n1"),
        ("n4", "c1", "n3"),
    ]
    assert all(b.type == BondType.SINGLE for b in result.bonds)


def test_existing_atoms_and_bonds_preserved_in_order():
    parent = Atom("c1", "C", 0.0, 0.0)
    other = Atom("o1", "O", 40.0, 0.0)
    bond = Bond("b1", "c1", "o1")
    molecule = Molecule([other, parent], [bond])

    result = place_hydrogens(parent, molecule, 3)

    assert result.atoms[:2] == molecule.atoms
    assert result.bonds[:1] == molecule.bonds
    assert len(molecule.atoms) == 2


def test_non_positive_count_is_noop():
    parent = Atom("c1", "C", 0.0, 0.0)
    molecule = Molecule([parent])
    assert place_hydrogens(parent, molecule, 0) is molecule
    assert place_hydrogens(parent, molecule, -2) is molecule


def test_unknown_parent_is_noop():
    molecule = Molecule([Atom("c1", "C", 0.0, 0.0)])
    stranger = Atom("x", "C", 0.0, 0.0)
    assert place_hydrogens(stranger, molecule, 2) is molecule


def test_collision_aware_avoids_heavy_neighbor():
    """Verifica collision aware avoids heavy neighbor.

    Returns:
        None.

    """
    parent = Atom("c1", "C", 0.0, 0.0)
    molecule = Molecule([parent, Atom("c2", "C", 40.0, 0.0)], [Bond("b1", "c1", "c2")])

    angles = collision_aware_angles(parent, molecule, 3)

    assert angles == pytest.approx([math.pi, math.pi / 2, 3 * math.pi / 2], abs=1e-9)


def test_collision_aware_avoids_existing_hydrogen():
    parent = Atom("c1", "C", 0.0, 0.0)
    molecule = Molecule(
        [parent, Atom("h1", "H", 0.0, 30.0)],
        [Bond("b1", "c1", "h1")],
    )
    assert collision_aware_angles(parent, molecule, 1) == pytest.approx([3 * math.pi / 2])


def test_collision_aware_without_neighbors_starts_at_zero():
    parent = Atom("c1", "C", 0.0, 0.0)
    angles = collision_aware_angles(parent, Molecule([parent]), 2)
    assert angles == pytest.approx([0.0, math.pi])


def test_collision_aware_never_repeats_an_angle():
    """Verifica collision aware never repeats an angle.

    Returns:
        None.

    """
    parent = Atom("s1", "S", 0.0, 0.0)
    neighbors = [
        Atom("c1", "C", 40.0, 3.0),
        Atom("c2", "C", -25.0, 31.0),
        Atom("o1", "O", -5.0, -40.0),
    ]
    bonds = [Bond(f"b{i}", "s1", n.id) for i, n in enumerate(neighbors)]
    molecule = Molecule([parent] + neighbors, bonds)

    result = place_hydrogens(parent, molecule, 6, avoid_neighbors=True)
    angles = _angles_of_new_hydrogens(parent, molecule, result)

    assert len(angles) == 6
    for a, b in itertools.combinations(angles, 2):
        assert angle_distance_rad(a, b) > 1e-6
