"""Configuración de la sesión de edición."""

from __future__ import annotations

from dataclasses import dataclass

from molcore.model import BondType


@dataclass
class EditorState:
    """Preferencias activas de la sesión de edición."""
    auto_hydrogens: bool = True  # Materializar/retirar H al editar
    default_element: str = "C"
    active_bond_type: BondType = BondType.SINGLE
    undo_limit: int = 100
