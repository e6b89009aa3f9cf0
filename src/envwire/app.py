from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from envwire.builders import make_context
from envwire.config import Settings
from envwire.context import ApplicationContext
from envwire.errors import DependencyError
from envwire.log import get_logger, setup_logging
from envwire.registry import CandidateRegistry


@dataclass(frozen=True)
class App:
    """Application wiring container.

    Holds the settings the application was started with and the context
    resolved from them. Both are fixed for the lifetime of the process.
    """

    settings: Settings
    context: ApplicationContext


def create_app(
    registry: CandidateRegistry,
    settings: Optional[Settings] = None,
    required: Optional[Iterable[Enum]] = None,
) -> App:
    """Configure logging and resolve every required service for the active profiles.

    Resolution failures are logged and re-raised so the process does not start.

    Raises:
        DependencyError: If any required service cannot be resolved.
    """
    settings = settings or Settings()
    setup_logging(settings)
    logger = get_logger(__name__)

    try:
        context = make_context(
            registry,
            settings.active_profiles,
            required,
            fallback_label=settings.fallback_label,
        )
    except DependencyError as e:
        logger.error(f"Startup aborted: {e}")
        raise

    logger.info(
        f"Started with profiles {sorted(settings.active_profiles)}: "
        f"{len(context.names)} services resolved"
    )
    return App(settings=settings, context=context)
