from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from core.services.scheduling import ScheduleService
from infra.db.repositories import (
    SqlAlchemyDependencyRepository,
    SqlAlchemyScheduleRepository,
    SqlAlchemyTaskRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    schedule_service: ScheduleService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "schedule_service": self.schedule_service,
        }


def build_service_graph(session: Session, locale: Optional[str] = None) -> ServiceGraph:
    schedule_repo = SqlAlchemyScheduleRepository(session)
    task_repo = SqlAlchemyTaskRepository(session)
    dependency_repo = SqlAlchemyDependencyRepository(session)

    schedule_service = ScheduleService(
        session,
        schedule_repo,
        task_repo,
        dependency_repo,
        locale=locale,
    )
    return ServiceGraph(session=session, schedule_service=schedule_service)


def build_services(session: Session, locale: Optional[str] = None) -> dict[str, Any]:
    return build_service_graph(session, locale=locale).as_dict()
