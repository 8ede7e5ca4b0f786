"""Entrada y salida de instantáneas moleculares (JSON y RDKit)."""

from .persistence import PersistenceManager

__all__ = ["PersistenceManager"]
