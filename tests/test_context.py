from dataclasses import dataclass
from enum import Enum
from typing import Annotated

import pytest

from envwire.builders import make_context, make_manifest, resolve
from envwire.errors import AmbiguousDependency, DependencyError, UnresolvedDependency
from envwire.registry import CandidateRegistry


class Service(Enum):
    DB = "db"
    PRINTER = "printer"
    REPORT = "report"
    AUDIT = "audit"


class Printer:
    def __init__(self):
        self.printed = []

    def print(self, line):
        self.printed.append(line)


@dataclass(frozen=True)
class Report:
    db: Annotated[dict, Service.DB]
    printer: Annotated[Printer, Service.PRINTER]

    def run(self):
        self.printer.print(f"name: {self.db['name']}")


@pytest.fixture
def registry() -> CandidateRegistry:
    registry = CandidateRegistry()

    @registry.candidate(Service.DB, labels=["test"])
    def make_test_db() -> dict:
        return {"name": "Arthur Putey"}

    @registry.candidate(Service.DB, labels=["uat"])
    def make_uat_db() -> dict:
        return {"name": "Gawain of Camelot"}

    registry.candidate(Service.PRINTER, labels=["*"])(Printer)
    registry.candidate(Service.REPORT, labels=["*"])(Report)

    return registry


def test_dependencies_are_injected_through_the_constructor(registry):
    context = make_context(registry, {"test"}, [Service.REPORT])
    context[Service.REPORT].run()

    assert context[Service.PRINTER].printed == ["name: Arthur Putey"]


def test_active_environment_decides_what_is_injected(registry):
    context = make_context(registry, {"uat"}, [Service.REPORT])
    assert context[Service.REPORT].db == {"name": "Gawain of Camelot"}
    assert context.active_env == frozenset({"uat"})


def test_components_are_built_once_and_shared(registry):
    @registry.candidate(Service.AUDIT, labels=["*"])
    def make_audit(printer: Annotated[Printer, Service.PRINTER]) -> Printer:
        return printer

    context = make_context(registry, {"test"})

    assert context[Service.AUDIT] is context[Service.PRINTER]
    assert context[Service.REPORT].printer is context[Service.PRINTER]


def test_only_required_services_and_their_dependencies_are_built(registry):
    context = make_context(registry, {"test"}, [Service.REPORT])
    assert set(context.names) == {Service.REPORT, Service.DB, Service.PRINTER}


def test_build_order_puts_dependencies_first(registry):
    manifest = make_manifest(registry, {"test"}, [Service.REPORT])

    assert manifest.build_order[-1] is Service.REPORT
    assert set(manifest.build_order[:2]) == {Service.DB, Service.PRINTER}
    assert manifest.selected[Service.DB].qualifier == "test_db"


def test_resolved_component_records_its_candidate(registry):
    context = make_context(registry, {"test"}, [Service.REPORT])
    component = context.component(Service.REPORT)

    assert component.name is Service.REPORT
    assert component.candidate.qualifier == "Report"
    assert component.dependencies == [Service.DB, Service.PRINTER]


def test_unresolved_dependency_fails_the_whole_context(registry):
    with pytest.raises(UnresolvedDependency, match="DB") as e:
        make_context(registry, {"prod"}, [Service.REPORT])

    assert e.value.name is Service.DB


def test_unknown_name_raises_key_error(registry):
    context = make_context(registry, {"test"}, [Service.PRINTER])

    assert Service.REPORT not in context
    with pytest.raises(KeyError):
        context[Service.REPORT]


def test_context_is_read_only(registry):
    context = make_context(registry, {"test"}, [Service.PRINTER])

    with pytest.raises(TypeError):
        context[Service.PRINTER] = Printer()


def test_dependency_cycle_detected():
    registry = CandidateRegistry()

    @registry.candidate(Service.DB, labels=["*"])
    def make_db(report: Annotated[int, Service.REPORT]) -> int:
        return report + 1

    @registry.candidate(Service.REPORT, labels=["*"])
    def make_report(db: Annotated[int, Service.DB]) -> int:
        return db + 1

    with pytest.raises(DependencyError, match=r"cycle: DB -> REPORT -> DB"):
        make_context(registry, {"dev"})


def test_self_dependency_detected():
    registry = CandidateRegistry()

    @registry.candidate(Service.DB, labels=["*"])
    def make_db(db: Annotated[int, Service.DB]) -> int:
        return db

    with pytest.raises(DependencyError, match=r"Unresolvable dependencies: \['DB'\] \(cycle: DB -> DB\)"):
        make_context(registry, {"dev"})


def test_dependency_qualifier_selects_candidate(registry):
    @registry.candidate(Service.AUDIT, labels=["*"])
    def make_audit(db: Annotated[dict, Service.DB, "uat_db"]) -> str:
        return db["name"]

    context = make_context(registry, {"test", "uat"}, [Service.AUDIT])
    assert context[Service.AUDIT] == "Gawain of Camelot"


def test_conflicting_qualifiers_raise(registry):
    @registry.candidate(Service.AUDIT, labels=["*"])
    def make_audit(db: Annotated[dict, Service.DB, "uat_db"]) -> str:
        return db["name"]

    with pytest.raises(DependencyError, match="requested as 'uat_db'"):
        make_context(
            registry,
            {"test", "uat"},
            [Service.DB, Service.AUDIT],
            qualifiers={Service.DB: "test_db"},
        )


def test_resolve_builds_dependencies(registry):
    report = resolve(registry, Service.REPORT, {"uat"})
    assert report.db == {"name": "Gawain of Camelot"}


def test_cycle_is_reported_apart_from_services_waiting_on_it():
    registry = CandidateRegistry()

    @registry.candidate(Service.DB, labels=["*"])
    def make_db(printer: Annotated[int, Service.PRINTER]) -> int:
        return printer

    @registry.candidate(Service.PRINTER, labels=["*"])
    def make_printer(db: Annotated[int, Service.DB]) -> int:
        return db

    @registry.candidate(Service.REPORT, labels=["*"])
    def make_report(db: Annotated[int, Service.DB]) -> int:
        return db

    with pytest.raises(DependencyError) as e:
        make_context(registry, {"dev"}, [Service.REPORT])

    assert "['DB', 'PRINTER', 'REPORT']" in str(e.value)
    assert "cycle: DB -> PRINTER -> DB" in str(e.value)


@pytest.fixture
def shared_qualifier_registry() -> CandidateRegistry:
    registry = CandidateRegistry()

    @registry.candidate(Service.DB, labels=["dev", "default"], qualifier="main_db")
    def make_dev_db() -> dict:
        return {"name": "dev"}

    @registry.candidate(Service.DB, labels=["prod"], qualifier="main_db")
    def make_prod_db() -> dict:
        return {"name": "prod"}

    @registry.candidate(Service.REPORT, labels=["*"])
    def make_report(db: Annotated[dict, Service.DB, "main_db"]) -> str:
        return db["name"]

    return registry


@pytest.mark.parametrize(
    "active_env, expected",
    [({"prod"}, "prod"), ({"dev", "default"}, "dev"), ({"default"}, "dev")],
)
def test_shared_qualifier_is_resolved_by_active_environment(
    shared_qualifier_registry, active_env, expected
):
    context = make_context(shared_qualifier_registry, active_env, [Service.REPORT])

    assert context[Service.REPORT] == expected
    assert context.component(Service.DB).candidate.qualifier == "main_db"


def test_shared_qualifier_without_matching_environment_is_unresolved(shared_qualifier_registry):
    with pytest.raises(UnresolvedDependency, match="DB"):
        make_context(shared_qualifier_registry, {"qa"}, [Service.REPORT])


def test_shared_qualifier_in_overlapping_environments_is_ambiguous():
    registry = CandidateRegistry()

    @registry.candidate(Service.DB, labels=["dev"], qualifier="main_db")
    def make_dev_db() -> dict:
        return {}

    @registry.candidate(Service.DB, labels=["dev", "qa"], qualifier="main_db")
    def make_shared_db() -> dict:
        return {}

    with pytest.raises(AmbiguousDependency):
        resolve(registry, Service.DB, {"dev"}, qualifier="main_db")
