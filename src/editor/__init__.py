"""Sesión de edición con deshacer/rehacer sobre instantáneas."""

from editor.session import EditorSession
from editor.state import EditorState

__all__ = ["EditorSession", "EditorState"]
