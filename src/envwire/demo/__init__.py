"""Sample application: datasource settings selected per environment."""

from typing import Optional

from envwire.app import App, create_app
from envwire.config import Settings
from envwire.demo.wiring import CONTROLLERS, build_registry

__all__ = ["create_demo_app"]


def create_demo_app(settings: Optional[Settings] = None) -> App:
    """Start the sample application, resolving its controllers and their services."""
    return create_app(build_registry(), settings, CONTROLLERS)
