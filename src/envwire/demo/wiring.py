"""Registration table of the sample application."""

from envwire.demo.controllers import (
    DatasourceController,
    EnvironmentController,
    GreetingController,
)
from envwire.demo.services import (
    DATASOURCE_QUALIFIER,
    DevDatasourceSettings,
    GreetingServiceImpl,
    ProdDatasourceSettings,
    QADatasourceSettings,
    ServiceName,
    UATDatasourceSettings,
    make_dev_environment,
    make_prod_environment,
    make_qa_environment,
    make_uat_environment,
)
from envwire.domain import DEFAULT_LABEL, WILDCARD_LABEL
from envwire.registry import CandidateRegistry
from envwire.table import registry_from_table

REGISTRATION_TABLE = [
    {
        "environment": ["dev", DEFAULT_LABEL],
        "implementations": {
            ServiceName.DATASOURCE_SETTINGS: DevDatasourceSettings,
            ServiceName.ENVIRONMENT: make_dev_environment,
        },
        "qualifiers": {ServiceName.DATASOURCE_SETTINGS: DATASOURCE_QUALIFIER},
    },
    {
        "environment": "qa",
        "implementations": {
            ServiceName.DATASOURCE_SETTINGS: QADatasourceSettings,
            ServiceName.ENVIRONMENT: make_qa_environment,
        },
        "qualifiers": {ServiceName.DATASOURCE_SETTINGS: DATASOURCE_QUALIFIER},
    },
    {
        "environment": "uat",
        "implementations": {
            ServiceName.DATASOURCE_SETTINGS: UATDatasourceSettings,
            ServiceName.ENVIRONMENT: make_uat_environment,
        },
        "qualifiers": {ServiceName.DATASOURCE_SETTINGS: DATASOURCE_QUALIFIER},
    },
    {
        "environment": "prod",
        "implementations": {
            ServiceName.DATASOURCE_SETTINGS: ProdDatasourceSettings,
            ServiceName.ENVIRONMENT: make_prod_environment,
        },
        "qualifiers": {ServiceName.DATASOURCE_SETTINGS: DATASOURCE_QUALIFIER},
    },
    {
        "environment": WILDCARD_LABEL,
        "implementations": {
            ServiceName.GREETING: GreetingServiceImpl,
            ServiceName.DATASOURCE_CONTROLLER: DatasourceController,
            ServiceName.ENVIRONMENT_CONTROLLER: EnvironmentController,
            ServiceName.GREETING_CONTROLLER: GreetingController,
        },
    },
]

CONTROLLERS = [
    ServiceName.DATASOURCE_CONTROLLER,
    ServiceName.ENVIRONMENT_CONTROLLER,
    ServiceName.GREETING_CONTROLLER,
]


def build_registry() -> CandidateRegistry:
    return registry_from_table(REGISTRATION_TABLE)
