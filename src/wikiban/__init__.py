"""Kanban boards kept in the markdown pages of a wiki."""
