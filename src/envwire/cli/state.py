"""CLI state container."""

from typing import Callable

from ..app import App
from ..config import Settings
from ..demo import create_demo_app


class CLIState:
    """Holds Settings and starts the application on first use.

    The application is created lazily so that commands which only inspect the
    registry never trigger resolution.
    """

    def __init__(
        self,
        settings: Settings,
        app_factory: Callable[[Settings], App] = create_demo_app,
    ):
        self.settings = settings
        self._app_factory = app_factory
        self._app = None

    @property
    def app(self) -> App:
        if self._app is None:
            self._app = self._app_factory(self.settings)
        return self._app
