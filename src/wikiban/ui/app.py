"""Main Textual application for wikiban."""

from textual.app import App

from wikiban.client import WikiClient, WikiError
from wikiban.sync import KanbanSession
from wikiban.ui.board import BoardScreen
from wikiban.ui.dialogs import ConfirmScreen


class WikibanApp(App):
    """Kanban board TUI for one wiki page."""

    TITLE = "wikiban"
    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, client: WikiClient, doc_path: str):
        super().__init__()
        self.client = client
        self.session = KanbanSession(client, doc_path)

    async def on_mount(self) -> None:
        await self._load_board()

    async def _load_board(self) -> None:
        """Fetch the page and show its board, offering a retry on failure."""
        try:
            await self.session.load()
        except WikiError as e:
            self.push_screen(ConfirmScreen(f"Could not load {self.session.doc_path}: {e}\nRetry?"), self._on_retry)
            return
        self.push_screen(BoardScreen(self.session))

    async def _on_retry(self, retry: bool) -> None:
        if retry:
            await self._load_board()
        else:
            self.exit(return_code=1)

    async def on_unmount(self) -> None:
        await self.client.aclose()
