"""Controllers of the sample application.

Every controller receives its collaborators through its constructor; the
parameter annotations name the service each one is resolved from.
"""

from typing import Annotated

from envwire.demo.services import (
    DATASOURCE_QUALIFIER,
    DatasourceSettingsService,
    EnvironmentService,
    GreetingService,
    ServiceName,
)


class DatasourceController:
    def __init__(
        self,
        settings_service: Annotated[
            DatasourceSettingsService, ServiceName.DATASOURCE_SETTINGS, DATASOURCE_QUALIFIER
        ],
    ):
        self._settings_service = settings_service

    def get_datasource(self) -> str:
        return self._settings_service.get_datasource_settings()


class EnvironmentController:
    def __init__(
        self,
        environment_service: Annotated[EnvironmentService, ServiceName.ENVIRONMENT],
    ):
        self._environment_service = environment_service

    def get_environment(self) -> str:
        return f"You are in {self._environment_service.get_env()} Environment"


class GreetingController:
    def __init__(
        self,
        greeting_service: Annotated[GreetingService, ServiceName.GREETING],
    ):
        self._greeting_service = greeting_service

    def say_hello(self) -> str:
        return self._greeting_service.say_greeting()
