"""Excepciones de las capas externas (sesión de edición y persistencia).

El motor de valencias no lanza excepciones: ante entradas inesperadas
devuelve la molécula sin cambios.
"""


class MolValenceError(Exception):
    """Raíz de las excepciones del proyecto."""


class EditorError(MolValenceError):
    """Se lanza cuando una acción de edición no puede aplicarse."""


class UnknownAtomError(EditorError):
    """El átomo indicado no existe en la instantánea actual."""


class UnknownBondError(EditorError):
    """El enlace indicado no existe en la instantánea actual."""


class DuplicateBondError(EditorError):
    """Ya existe un enlace entre los dos átomos."""


class ValenceExceededError(EditorError):
    """El enlace propuesto supera la capacidad de valencia de un extremo."""


class MoleculeFormatError(MolValenceError, ValueError):
    """El documento leído no describe una molécula válida."""
