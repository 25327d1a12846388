from datetime import date

import pytest

from core.events.domain_events import schedule_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.models import DependencyType


def _jan(day):
    return date(2024, 1, day)


def _build_chain(services):
    ss = services["schedule_service"]
    schedule = ss.create_schedule("Edificio Norte", working_days_per_week=5)
    excavation = ss.add_task(schedule.id, "1.1", "Excavación", _jan(8), _jan(10))
    footings = ss.add_task(schedule.id, "1.2", "Zapatas", _jan(12), _jan(16))
    slab = ss.add_task(schedule.id, "1.3", "Losa", _jan(17), _jan(19))
    ss.add_dependency(excavation.id, footings.id, DependencyType.FINISH_TO_START, lag_days=2)
    ss.add_dependency(footings.id, slab.id, DependencyType.FINISH_TO_START, lag_days=1)
    return schedule, excavation, footings, slab


def test_create_schedule_uses_configured_default_week(services, monkeypatch):
    ss = services["schedule_service"]
    monkeypatch.setenv("PM_DEFAULT_WORKING_DAYS", "6")

    schedule = ss.create_schedule("Six-day site")

    assert schedule.working_days_per_week == 6
    assert ss.get_schedule(schedule.id).working_days_per_week == 6


def test_create_schedule_rejects_invalid_week(services):
    with pytest.raises(ValidationError) as exc:
        services["schedule_service"].create_schedule("Bad", working_days_per_week=0)
    assert exc.value.code == "INVALID_WORKING_WEEK"


def test_set_working_days_per_week_persists(services):
    ss = services["schedule_service"]
    schedule = ss.create_schedule("Site", working_days_per_week=5)

    ss.set_working_days_per_week(schedule.id, 7)

    assert ss.get_schedule(schedule.id).working_days_per_week == 7
    with pytest.raises(ValidationError):
        ss.set_working_days_per_week(schedule.id, 8)


def test_add_task_validation(services):
    ss = services["schedule_service"]
    schedule = ss.create_schedule("Site")

    with pytest.raises(ValidationError) as exc:
        ss.add_task(schedule.id, "  ", "Name", _jan(1), _jan(2))
    assert exc.value.code == "TASK_CODE_EMPTY"
    with pytest.raises(ValidationError) as exc:
        ss.add_task(schedule.id, "1", "", _jan(1), _jan(2))
    assert exc.value.code == "TASK_NAME_EMPTY"
    with pytest.raises(ValidationError) as exc:
        ss.add_task(schedule.id, "1", "Name", _jan(3), _jan(2))
    assert exc.value.code == "TASK_INVALID_DATE"
    with pytest.raises(NotFoundError):
        ss.add_task("missing", "1", "Name", _jan(1), _jan(2))


def test_list_tasks_sorted_by_start(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)

    assert [t.code for t in ss.list_tasks(schedule.id)] == ["1.1", "1.2", "1.3"]
    assert len(ss.list_dependencies_for_task(footings.id)) == 2


def test_dependency_rules(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)
    other = ss.create_schedule("Other")
    foreign = ss.add_task(other.id, "9.9", "Foreign", _jan(1), _jan(2))

    with pytest.raises(ValidationError) as exc:
        ss.add_dependency(excavation.id, excavation.id)
    assert exc.value.code == "DEPENDENCY_SELF"

    with pytest.raises(NotFoundError):
        ss.add_dependency(excavation.id, "missing")

    with pytest.raises(ValidationError) as exc:
        ss.add_dependency(excavation.id, foreign.id)
    assert exc.value.code == "DEPENDENCY_CROSS_SCHEDULE"

    with pytest.raises(ValidationError) as exc:
        ss.add_dependency(excavation.id, footings.id)
    assert exc.value.code == "DEPENDENCY_DUPLICATE"

    with pytest.raises(BusinessRuleError) as exc:
        ss.add_dependency(slab.id, excavation.id)
    assert exc.value.code == "DEPENDENCY_CYCLE"
    assert "1.3 -> 1.1 -> 1.2 -> 1.3" in str(exc.value)


def test_remove_dependency(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)
    dep = next(
        d for d in ss.list_dependencies_for_task(slab.id) if d.predecessor_task_id == footings.id
    )

    ss.remove_dependency(dep.id)

    assert ss.list_dependencies_for_task(slab.id) == []
    with pytest.raises(NotFoundError):
        ss.remove_dependency(dep.id)


def test_validate_task_dates_against_stored_dependencies(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)

    assert ss.validate_task_dates(footings.id, _jan(12), _jan(16)).is_valid

    result = ss.validate_task_dates(footings.id, _jan(11), _jan(16))
    assert not result.is_valid
    assert "FS + 2 días" in result.message
    assert "12/01/2024" in result.message


def test_update_without_cascade_rejects_and_keeps_stored_dates(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)

    with pytest.raises(ValidationError) as exc:
        ss.update_task_dates(excavation.id, _jan(8), _jan(11))

    assert exc.value.code == "DEPENDENCY_VIOLATION"
    assert "1.2" in str(exc.value)
    assert ss.get_task(excavation.id).end_date == _jan(10)
    assert ss.get_task(footings.id).start_date == _jan(12)


def test_update_without_cascade_persists_valid_change(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)
    seen = []
    schedule_events.tasks_changed.connect(seen.append)
    try:
        result = ss.update_task_dates(excavation.id, _jan(5), _jan(9))
    finally:
        schedule_events.tasks_changed.disconnect(seen.append)

    assert result.shifts == []
    stored = ss.get_task(excavation.id)
    assert (stored.start_date, stored.end_date) == (_jan(5), _jan(9))
    assert seen == [schedule.id]


def test_update_with_cascade_shifts_and_persists_successors(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)

    result = ss.update_task_dates(excavation.id, _jan(8), _jan(11), cascade=True)

    # Thu 11 + 2 working days = Mon 15; footings keeps its 4 calendar days
    assert result.shifted_task_ids == [footings.id, slab.id]
    assert (ss.get_task(footings.id).start_date, ss.get_task(footings.id).end_date) == (_jan(15), _jan(19))
    # Fri 19 + 1 working day = Mon 22
    assert (ss.get_task(slab.id).start_date, ss.get_task(slab.id).end_date) == (_jan(22), _jan(24))
    assert ss.get_task(excavation.id).end_date == _jan(11)


def test_cascade_still_enforces_predecessors(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)

    with pytest.raises(ValidationError) as exc:
        ss.update_task_dates(slab.id, _jan(16), _jan(19), cascade=True)
    assert exc.value.code == "DEPENDENCY_VIOLATION"
    assert ss.get_task(slab.id).start_date == _jan(17)


def test_preview_does_not_write(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)

    preview = ss.preview_date_change(excavation.id, _jan(8), _jan(11))

    assert preview.shift_for(footings.id).after_start == _jan(15)
    assert ss.get_task(footings.id).start_date == _jan(12)
    assert ss.get_task(excavation.id).end_date == _jan(10)


def test_delete_task_removes_its_dependencies(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)

    ss.delete_task(footings.id)

    assert [t.code for t in ss.list_tasks(schedule.id)] == ["1.1", "1.3"]
    assert ss.list_dependencies_for_task(excavation.id) == []
    with pytest.raises(NotFoundError):
        ss.get_task(footings.id)


def test_messages_follow_service_locale(session):
    from infra.services import build_service_graph

    ss = build_service_graph(session, locale="en").schedule_service
    schedule = ss.create_schedule("Site", working_days_per_week=5)
    a = ss.add_task(schedule.id, "A", "First", _jan(8), _jan(10))
    b = ss.add_task(schedule.id, "B", "Second", _jan(12), _jan(15))
    ss.add_dependency(a.id, b.id, "FS", 2)

    result = ss.validate_task_dates(b.id, _jan(11), _jan(15))

    assert result.message.startswith("The start date cannot precede the predecessor constraint on A")
    assert "2024-01-12" in result.message


def test_dependency_diagnostics_explain_rejections(services):
    ss = services["schedule_service"]
    schedule, excavation, footings, slab = _build_chain(services)

    assert ss.get_dependency_diagnostics(excavation.id, slab.id).is_valid
    assert ss.get_dependency_diagnostics(slab.id, slab.id).code == "DEPENDENCY_SELF"
    assert ss.get_dependency_diagnostics(excavation.id, footings.id).code == "DEPENDENCY_DUPLICATE"

    cycle = ss.get_dependency_diagnostics(slab.id, excavation.id)
    assert not cycle.is_valid
    assert cycle.code == "DEPENDENCY_CYCLE"
    assert "1.3 -> 1.1 -> 1.2 -> 1.3" in cycle.message


def test_add_dependency_rejects_bad_type_and_lag(services):
    ss = services["schedule_service"]
    schedule = ss.create_schedule("Site")
    a = ss.add_task(schedule.id, "A", "First", _jan(8), _jan(10))
    b = ss.add_task(schedule.id, "B", "Second", _jan(12), _jan(15))

    with pytest.raises(ValidationError) as exc:
        ss.add_dependency(a.id, b.id, "XX")
    assert exc.value.code == "INVALID_DEPENDENCY_TYPE"

    with pytest.raises(ValidationError) as exc:
        ss.add_dependency(a.id, b.id, DependencyType.FINISH_TO_START, lag_days=1.5)
    assert exc.value.code == "INVALID_LAG"

    assert ss.list_dependencies_for_task(a.id) == []


@pytest.mark.parametrize("raw", ["abc", "8", "0"])
def test_create_schedule_rejects_bad_default_week_setting(services, monkeypatch, raw):
    monkeypatch.setenv("PM_DEFAULT_WORKING_DAYS", raw)

    with pytest.raises(ValidationError) as exc:
        services["schedule_service"].create_schedule("Site")
    assert exc.value.code == "INVALID_WORKING_WEEK"


def test_blank_default_week_setting_means_five_days(services, monkeypatch):
    monkeypatch.setenv("PM_DEFAULT_WORKING_DAYS", "  ")
    assert services["schedule_service"].create_schedule("Site").working_days_per_week == 5
