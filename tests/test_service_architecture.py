from core.services import ScheduleService as PackageScheduleService
from core.services.scheduling import ScheduleService
from core.services.scheduling.dates import ScheduleDatesMixin
from core.services.scheduling.dependency import ScheduleDependencyMixin
from core.services.scheduling.lifecycle import ScheduleLifecycleMixin
from infra.services import ServiceGraph, build_service_graph, build_services


def test_service_graph_builder_wires_schedule_service(session):
    graph = build_service_graph(session)

    assert isinstance(graph, ServiceGraph)
    assert isinstance(graph.schedule_service, ScheduleService)

    as_dict = graph.as_dict()
    assert as_dict["schedule_service"] is graph.schedule_service
    assert as_dict["session"] is session


def test_build_services_returns_mapping(session):
    services = build_services(session, locale="en")
    assert set(services) == {"session", "schedule_service"}


def test_schedule_service_is_composed_from_mixins():
    assert PackageScheduleService is ScheduleService
    for mixin in (ScheduleLifecycleMixin, ScheduleDependencyMixin, ScheduleDatesMixin):
        assert issubclass(ScheduleService, mixin)
