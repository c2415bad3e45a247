"""Pagination strip: Previous, ten page buttons, Next."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button

PAGE_BUTTON_COUNT = 10


def pagination_labels(current_page: int) -> list[tuple[str, str, bool]]:
    """Describe the pagination strip for the current page.

    The page buttons always read 1 to 10 whatever the current page is.

    Args:
        current_page: Page currently shown

    Returns:
        ``(button_id, label, is_current)`` for each button, left to right
    """
    buttons = [("page-prev", "Previous", False)]
    for number in range(1, PAGE_BUTTON_COUNT + 1):
        buttons.append((f"page-{number}", str(number), number == current_page))
    buttons.append(("page-next", "Next", False))
    return buttons


class PaginationStrip(Horizontal):
    """Row of pagination buttons; the current page's button is highlighted."""

    DEFAULT_CSS: ClassVar[str] = """
    PaginationStrip {
        height: auto;
        align: center middle;
        margin-top: 1;
    }

    PaginationStrip Button {
        min-width: 5;
        margin: 0 0;
    }

    PaginationStrip Button.current-page {
        background: $primary;
        text-style: bold;
    }
    """

    def __init__(
        self,
        current_page: int = 1,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._current_page: int = current_page

    @override
    def compose(self) -> ComposeResult:
        for button_id, label, is_current in pagination_labels(self._current_page):
            variant = "primary" if button_id in ("page-prev", "page-next") else "default"
            yield Button(
                label,
                id=button_id,
                variant=variant,
                classes="current-page" if is_current else "",
            )

    def set_current_page(self, page: int) -> None:
        """Move the highlight to ``page``."""
        self._current_page = page
        for button_id, _, is_current in pagination_labels(page):
            button = self.query_one(f"#{button_id}", Button)
            _ = button.set_class(is_current, "current-page")
