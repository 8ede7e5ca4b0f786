"""API pública del motor de valencias e hidrógenos implícitos."""

from .bonds import bond_order_sum
from .feasibility import can_bond_atoms, valence_violations
from .hydrogens import connected_hydrogens, required_hydrogen_count
from .placement import HYDROGEN_DISTANCE, place_hydrogens
from .reconcile import (
    add_hydrogens_to_atom,
    fill_missing_hydrogens,
    remove_excess_hydrogens,
    update_hydrogens_after_bond_removal,
    update_hydrogens_after_bond_type_change,
    update_hydrogens_after_bonding,
)

__all__ = [
    "bond_order_sum",
    "can_bond_atoms",
    "valence_violations",
    "connected_hydrogens",
    "required_hydrogen_count",
    "HYDROGEN_DISTANCE",
    "place_hydrogens",
    "add_hydrogens_to_atom",
    "fill_missing_hydrogens",
    "remove_excess_hydrogens",
    "update_hydrogens_after_bond_removal",
    "update_hydrogens_after_bond_type_change",
    "update_hydrogens_after_bonding",
]
