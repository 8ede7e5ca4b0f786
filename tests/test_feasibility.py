"""Pruebas unitarias para test_feasibility."""

import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from molcore.model import Atom, Bond, BondType, Molecule
from valence.feasibility import can_bond_atoms, valence_violations
from valence.reconcile import add_hydrogens_to_atom


def _carbon_with_partners(atom_id, x, partner_orders):
    """Función de prueba auxiliar para carbon with partners.

    Args:
        atom_id: ID del carbono central.
        x: Coordenada X del carbono.
        partner_orders: Tipos de enlace hacia oxígenos auxiliares.

    Returns:
        Tupla con los átomos y enlaces creados.

    """
    atoms = [Atom(atom_id, "C", x, 0.0)]
    bonds = []
    for i, bond_type in enumerate(partner_orders):
        partner = Atom(f"{atom_id}_p{i}", "O", x + i, 10.0)
        atoms.append(partner)
        bonds.append(Bond(f"{atom_id}_b{i}", atom_id, partner.id, bond_type))
    return atoms, bonds


class CanBondAtomsTest(unittest.TestCase):
    """Casos de prueba para CanBondAtomsTest."""
    def test_saturated_carbons_reject_any_bond(self):
        """Verifica saturated carbons reject any bond.

        Returns:
            None.

        """
        a_atoms, a_bonds = _carbon_with_partners("c1", 0.0, [BondType.DOUBLE, BondType.DOUBLE])
        b_atoms, b_bonds = _carbon_with_partners("c2", 50.0, [BondType.TRIPLE, BondType.SINGLE])
        molecule = Molecule(a_atoms + b_atoms, a_bonds + b_bonds)
        for order in (1, 2, 3):
            self.assertFalse(can_bond_atoms("c1", "c2", molecule, bond_order=order))

    def test_free_carbons_accept_up_to_triple(self):
        """Verifica free carbons accept up to triple.

        Returns:
            None.

        """
        molecule = Molecule([Atom("c1", "C", 0.0, 0.0), Atom("c2", "C", 40.0, 0.0)])
        self.assertTrue(can_bond_atoms("c1", "c2", molecule))
        self.assertTrue(can_bond_atoms("c1", "c2", molecule, bond_order=3))

    def test_one_full_endpoint_is_enough_to_reject(self):
        molecule = Molecule(
            [Atom("o1", "O", 0.0, 0.0), Atom("c1", "C", 40.0, 0.0), Atom("c2", "C", 0.0, 40.0)],
            [Bond("b1", "o1", "c2", BondType.DOUBLE)],
        )
        self.assertFalse(can_bond_atoms("c1", "o1", molecule))
        self.assertTrue(can_bond_atoms("c1", "c2", molecule, bond_order=2))

    def test_missing_or_identical_endpoints(self):
        molecule = Molecule([Atom("c1", "C", 0.0, 0.0)])
        self.assertFalse(can_bond_atoms("c1", "zz", molecule))
        self.assertFalse(can_bond_atoms("zz", "c1", molecule))
        self.assertFalse(can_bond_atoms("c1", "c1", molecule))

    def test_displaced_hydrogens_do_not_count(self):
        """Verifica displaced hydrogens do not count.

        Returns:
            None.

        """
        molecule = Molecule([Atom("c1", "C", 0.0, 0.0), Atom("c2", "C", 60.0, 0.0)])
        molecule = add_hydrogens_to_atom(molecule.atoms[0], molecule)
        molecule = add_hydrogens_to_atom(molecule.find_atom("c2"), molecule)

        self.assertFalse(can_bond_atoms("c1", "c2", molecule))
        self.assertTrue(can_bond_atoms("c1", "c2", molecule, displace_hydrogens=True))
        self.assertTrue(can_bond_atoms("c1", "c2", molecule, bond_order=3, displace_hydrogens=True))

    def test_does_not_modify_molecule(self):
        molecule = Molecule([Atom("c1", "C", 0.0, 0.0), Atom("c2", "C", 40.0, 0.0)])
        before = molecule.bonds
        can_bond_atoms("c1", "c2", molecule)
        self.assertIs(molecule.bonds, before)


class ValenceViolationsTest(unittest.TestCase):
    """Casos de prueba para ValenceViolationsTest."""
    def test_flags_overvalent_carbon(self):
        """Verifica flags overvalent carbon.

        Returns:
            None.

        """
        atoms = [Atom("c1", "C", 0.0, 0.0)] + [Atom(f"h{k}", "H", float(k), 1.0) for k in range(5)]
        bonds = [Bond(f"b{k}", "c1", f"h{k}") for k in range(5)]
        self.assertEqual(valence_violations(Molecule(atoms, bonds)), ["c1"])

    def test_allows_sf6(self):
        atoms = [Atom("s1", "S", 0.0, 0.0)] + [Atom(f"f{k}", "F", float(k), 1.0) for k in range(6)]
        bonds = [Bond(f"b{k}", "s1", f"f{k}") for k in range(6)]
        self.assertEqual(valence_violations(Molecule(atoms, bonds)), [])

    def test_unknown_elements_are_not_checked(self):
        atoms = [Atom("x1", "Xe", 0.0, 0.0)] + [Atom(f"f{k}", "F", float(k), 1.0) for k in range(8)]
        bonds = [Bond(f"b{k}", "x1", f"f{k}") for k in range(8)]
        self.assertEqual(valence_violations(Molecule(atoms, bonds)), [])


if __name__ == "__main__":
    unittest.main()
