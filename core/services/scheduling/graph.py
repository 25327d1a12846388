from __future__ import annotations

import heapq
import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from core.domain.calendar import ensure_whole_days
from core.domain.dates import as_day
from core.domain.enums import coerce_dependency_type
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.models import DependencyType, Task, TaskDependency
from core.services.scheduling.validation import PredecessorLink, SuccessorLink

logger = logging.getLogger(__name__)

_UNVISITED, _IN_PROGRESS, _DONE = 0, 1, 2


@dataclass(frozen=True)
class ScheduleEdge:
    predecessor: int
    successor: int
    dependency_type: DependencyType
    lag_days: int = 0
    dependency_id: Optional[str] = None


class ScheduleGraph:
    """
    Tasks stored by index with predecessor/successor edge lists per index.
    Construction fails with SCHEDULE_CYCLE when the links are not acyclic.
    """

    def __init__(self, tasks: Sequence[Task], dependencies: Sequence[TaskDependency]):
        self.tasks: List[Task] = list(tasks)
        self.index_by_id: Dict[str, int] = {}
        for idx, task in enumerate(self.tasks):
            if task.id in self.index_by_id:
                raise ValidationError(
                    f"Task '{task.label}' appears twice in the schedule.",
                    code="DUPLICATE_TASK",
                )
            self.index_by_id[task.id] = idx

        self.successors: List[List[ScheduleEdge]] = [[] for _ in self.tasks]
        self.predecessors: List[List[ScheduleEdge]] = [[] for _ in self.tasks]
        for dep in dependencies:
            pred = self.index_by_id.get(dep.predecessor_task_id)
            succ = self.index_by_id.get(dep.successor_task_id)
            if pred is None or succ is None:
                logger.debug("Ignoring dependency %s outside the schedule", dep.id)
                continue
            edge = ScheduleEdge(
                predecessor=pred,
                successor=succ,
                dependency_type=coerce_dependency_type(dep.dependency_type),
                lag_days=ensure_whole_days(dep.lag_days or 0),
                dependency_id=dep.id,
            )
            self.successors[pred].append(edge)
            self.predecessors[succ].append(edge)

        self.topological_order: List[int] = self._topological_order()

    def __len__(self) -> int:
        return len(self.tasks)

    def index_of(self, task_id: str) -> int:
        idx = self.index_by_id.get(task_id)
        if idx is None:
            raise NotFoundError(f"Task id '{task_id}' does not exist.", code="TASK_NOT_FOUND")
        return idx

    def task(self, task_id: str) -> Task:
        return self.tasks[self.index_of(task_id)]

    def links_for(self, task_id: str) -> tuple[list[PredecessorLink], list[SuccessorLink]]:
        idx = self.index_of(task_id)
        predecessors = [
            PredecessorLink(
                start_date=as_day(self.tasks[edge.predecessor].start_date),
                end_date=as_day(self.tasks[edge.predecessor].end_date),
                dependency_type=edge.dependency_type,
                lag_days=edge.lag_days,
                code=self.tasks[edge.predecessor].label,
            )
            for edge in self.predecessors[idx]
        ]
        successors = [
            SuccessorLink(
                start_date=as_day(self.tasks[edge.successor].start_date),
                end_date=as_day(self.tasks[edge.successor].end_date),
                dependency_type=edge.dependency_type,
                lag_days=edge.lag_days,
                code=self.tasks[edge.successor].label,
            )
            for edge in self.successors[idx]
        ]
        return predecessors, successors

    def find_path(self, source_id: str, target_id: str) -> list[str] | None:
        """Task ids along a successor path from source to target, if any."""
        start = self.index_of(source_id)
        target = self.index_of(target_id)
        queue = deque([(start, [start])])
        visited: set[int] = set()
        while queue:
            node, path = queue.popleft()
            if node == target:
                return [self.tasks[i].id for i in path]
            if node in visited:
                continue
            visited.add(node)
            for edge in self.successors[node]:
                if edge.successor not in visited:
                    queue.append((edge.successor, [*path, edge.successor]))
        return None

    def _topological_order(self) -> List[int]:
        indegree = [len(edges) for edges in self.predecessors]
        heap: list[tuple[str, int]] = [
            (self.tasks[idx].label, idx) for idx, degree in enumerate(indegree) if degree == 0
        ]
        heapq.heapify(heap)

        order: List[int] = []
        while heap:
            _label, idx = heapq.heappop(heap)
            order.append(idx)
            for edge in self.successors[idx]:
                indegree[edge.successor] -= 1
                if indegree[edge.successor] == 0:
                    heapq.heappush(heap, (self.tasks[edge.successor].label, edge.successor))

        if len(order) != len(self.tasks):
            cycle = self._find_cycle(remaining={i for i, d in enumerate(indegree) if d > 0})
            cycle_text = " -> ".join(self.tasks[i].label for i in cycle)
            raise BusinessRuleError(
                f"Cannot schedule: circular dependency detected ({cycle_text}).",
                code="SCHEDULE_CYCLE",
            )
        return order

    def _find_cycle(self, remaining: set[int]) -> list[int]:
        state = [_UNVISITED] * len(self.tasks)
        for root in sorted(remaining):
            if state[root] != _UNVISITED:
                continue
            stack: list[tuple[int, int]] = [(root, 0)]
            path: list[int] = [root]
            state[root] = _IN_PROGRESS
            while stack:
                node, edge_pos = stack[-1]
                edges = self.successors[node]
                if edge_pos >= len(edges):
                    stack.pop()
                    path.pop()
                    state[node] = _DONE
                    continue
                stack[-1] = (node, edge_pos + 1)
                nxt = edges[edge_pos].successor
                if state[nxt] == _IN_PROGRESS:
                    return [*path[path.index(nxt):], nxt]
                if state[nxt] == _UNVISITED:
                    state[nxt] = _IN_PROGRESS
                    stack.append((nxt, 0))
                    path.append(nxt)
        return sorted(remaining)


__all__ = ["ScheduleEdge", "ScheduleGraph"]
