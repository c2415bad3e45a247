"""Base screen class with common functionality for all screens."""

from typing import TYPE_CHECKING, ClassVar

from textual.binding import Binding, BindingType
from textual.screen import Screen

import structlog

from ...services.errors import (
    ErrorSeverity,
    UserFriendlyError,
    get_error_service,
    handle_error,
)

if TYPE_CHECKING:
    from ..app import MovieBrowserApp

log = structlog.stdlib.get_logger()


class BaseScreen(Screen[None]):
    """Base screen for the browser's screens.

    Provides the escape binding, access to the owning app and its browser
    service, and error notifications built from ``UserFriendlyError``.
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("escape", "go_back", "Back", show=True),
    ]

    # Subclasses override these
    SCREEN_TITLE: ClassVar[str] = "Screen"
    SCREEN_NAME: ClassVar[str] = "base"

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name=name or self.SCREEN_NAME)

    @property
    def browser_app(self) -> "MovieBrowserApp":
        """Get the parent MovieBrowserApp instance.

        Raises:
            RuntimeError: If the screen is not attached to a MovieBrowserApp
        """
        from ..app import MovieBrowserApp

        if isinstance(self.app, MovieBrowserApp):
            return self.app
        raise RuntimeError("Screen is not attached to a MovieBrowserApp")

    async def on_mount(self) -> None:
        log.info("Screen mounted", screen=self.SCREEN_NAME, title=self.SCREEN_TITLE)

    async def on_unmount(self) -> None:
        log.info("Screen unmounted", screen=self.SCREEN_NAME)

    async def action_go_back(self) -> None:
        """Navigate back to the previous screen."""
        await self.browser_app.action_go_back()

    def notify_error(self, message: str) -> None:
        self.notify(message, severity="error")
        log.error("User notification", message=message, screen=self.SCREEN_NAME)

    def notify_warning(self, message: str) -> None:
        self.notify(message, severity="warning")
        log.warning("User notification", message=message, screen=self.SCREEN_NAME)

    def handle_exception(
        self,
        error: Exception,
        operation: str,
        context: dict[str, str | int | float | bool] | None = None,
    ) -> UserFriendlyError:
        """Log an exception and show it to the user as a notification.

        Returns:
            The UserFriendlyError the notification was built from
        """
        user_error = handle_error(
            error=error,
            operation=operation,
            component=self.SCREEN_NAME,
            context=context,
        )

        message = get_error_service().create_user_message(user_error, include_suggestions=False)

        if user_error.severity == ErrorSeverity.WARNING:
            self.notify_warning(message)
        else:
            self.notify_error(message)

        return user_error
