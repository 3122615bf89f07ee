"""Save status indicator for the board header."""

from __future__ import annotations

from textual.widgets import Static

from wikiban.sync import KanbanSession

ICON_IDLE = "·"
ICON_LOADING = "⟳"
ICON_SAVING = "⟳"
ICON_SAVED = "✓"
ICON_ERROR = "✗"

_LABELS = {
    "idle": (ICON_IDLE, ""),
    "loading": (ICON_LOADING, "loading…"),
    "saving": (ICON_SAVING, "saving…"),
    "saved": (ICON_SAVED, "saved"),
    "error": (ICON_ERROR, "error"),
}


def status_label(status: str) -> str:
    """Icon and word for a session status."""
    icon, word = _LABELS.get(status, (ICON_IDLE, status))
    return f"{icon} {word}".rstrip()


class SaveStatus(Static):
    """Shows whether the board is saving, saved or failed to save."""

    DEFAULT_CSS = """
    SaveStatus {
        width: auto;
        padding: 0 1;
    }
    SaveStatus.-error {
        color: $error;
    }
    """

    def __init__(self, session: KanbanSession, **kwargs) -> None:
        super().__init__(status_label(session.status), **kwargs)
        self.session = session
        self._unwatch = None

    def on_mount(self) -> None:
        self._unwatch = self.session.watch(self._on_session_changed)
        self._update_display()

    def on_unmount(self) -> None:
        if self._unwatch is not None:
            self._unwatch()
            self._unwatch = None

    def _on_session_changed(self, session, key, old, new) -> None:
        if key == "status":
            self.call_later(self._update_display)

    def _update_display(self) -> None:
        self.update(status_label(self.session.status))
        self.set_class(self.session.status == "error", "-error")
