"""Services of the sample application, one implementation per environment."""

import typing as t
from enum import Enum


DATASOURCE_QUALIFIER = "DBSettingMyService"
"""Candidate name shared by the datasource settings of every environment."""


class ServiceName(Enum):
    DATASOURCE_SETTINGS = "datasource_settings"
    ENVIRONMENT = "environment"
    GREETING = "greeting"
    DATASOURCE_CONTROLLER = "datasource_controller"
    ENVIRONMENT_CONTROLLER = "environment_controller"
    GREETING_CONTROLLER = "greeting_controller"


class DatasourceSettingsService(t.Protocol):
    def get_datasource_settings(self) -> str:
        ...


class EnvironmentService(t.Protocol):
    def get_env(self) -> str:
        ...


class GreetingService(t.Protocol):
    def say_greeting(self) -> str:
        ...


class DevDatasourceSettings:
    def get_datasource_settings(self) -> str:
        return "dev"


class QADatasourceSettings:
    def get_datasource_settings(self) -> str:
        return "qa"


class UATDatasourceSettings:
    def get_datasource_settings(self) -> str:
        return "uat"


class ProdDatasourceSettings:
    def get_datasource_settings(self) -> str:
        return "prod"


class LabelledEnvironmentService:
    """Reports a fixed environment name."""

    def __init__(self, env: str):
        self._env = env

    def get_env(self) -> str:
        return self._env


def make_dev_environment() -> EnvironmentService:
    return LabelledEnvironmentService("dev")


def make_qa_environment() -> EnvironmentService:
    return LabelledEnvironmentService("qa")


def make_uat_environment() -> EnvironmentService:
    return LabelledEnvironmentService("uat")


def make_prod_environment() -> EnvironmentService:
    return LabelledEnvironmentService("prod")


class GreetingServiceImpl:
    def say_greeting(self) -> str:
        return "Hello Everyone From Base!!!"
