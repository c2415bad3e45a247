"""Movie card widget for the movie grid."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.binding import Binding, BindingType
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static

from ...models.movie import Movie, format_movie_card


class MovieCard(Widget, can_focus=True):
    """A single movie in the grid: title, rating/year/runtime and cover URL.

    Clicking the card or pressing enter posts ``MovieCard.Selected`` with the
    movie, whose ``detail_path`` is the card's destination.
    """

    DEFAULT_CSS: ClassVar[str] = """
    MovieCard {
        height: auto;
        padding: 1;
        border: round $primary-darken-2;
        background: $surface;
    }

    MovieCard:focus {
        border: round $accent;
    }

    MovieCard .card-title {
        text-style: bold;
        margin-bottom: 1;
    }

    MovieCard .card-details {
        color: $text;
    }

    MovieCard .card-genres {
        color: $secondary;
    }

    MovieCard .card-cover {
        color: $text-muted;
        text-style: italic;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("enter", "select", "Open", show=False),
    ]

    class Selected(Message):
        """Message when a movie card is activated."""

        movie: Movie

        def __init__(self, movie: Movie) -> None:
            super().__init__()
            self.movie = movie

    def __init__(
        self,
        movie: Movie,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.movie: Movie = movie

    @override
    def compose(self) -> ComposeResult:
        info = format_movie_card(self.movie)
        yield Static(info["title"], classes="card-title", markup=False)
        yield Static(info["details"], classes="card-details", markup=False)
        yield Static(info["genres"], classes="card-genres", markup=False)
        yield Static(info["cover"], classes="card-cover", markup=False)

    def on_click(self) -> None:
        self.action_select()

    def action_select(self) -> None:
        _ = self.post_message(self.Selected(self.movie))
