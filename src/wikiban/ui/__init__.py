"""Textual UI for wikiban."""

from wikiban.ui.app import WikibanApp

__all__ = ["WikibanApp"]
