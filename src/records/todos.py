"""Todo records."""

from __future__ import annotations

from enum import StrEnum

import msgspec

from content.temporal import TemporalValue
from records.base import RecordBase
from records.books import Tag


class Priority(StrEnum):
    """Todo priority; ``UNKNOWN`` travels as a single blank.

    Any other blank string, including the empty string, reads as ``UNKNOWN``.
    """

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    UNKNOWN = " "

    @classmethod
    def _missing_(cls, value: object) -> Priority | None:
        if isinstance(value, str) and not value.strip():
            return cls.UNKNOWN
        return None


class Complexity(StrEnum):
    """T-shirt size estimate of a todo."""

    EXTRA_SMALL = "XS"
    SMALL = "S"
    MEDIUM = "M"
    LARGE = "L"
    EXTRA_LARGE = "XL"


class Project(RecordBase):
    name: str


class Task(RecordBase):
    """Checklist entry inside a todo."""

    description: str
    completed: bool = False


class Todo(RecordBase):
    """Todo record.

    ``created`` is set once when the todo is first stored and ``changed`` on
    every store. The exporter compares ``changed`` against its last export.
    """

    title: str
    id: int | None = None
    description: str = ""
    completed: bool = False
    priority: Priority = Priority.UNKNOWN
    complexity: Complexity = Complexity.MEDIUM
    tags: tuple[Tag, ...] = ()
    projects: tuple[Project, ...] = ()
    tasks: tuple[Task, ...] = ()
    created: TemporalValue | None = None
    changed: TemporalValue | None = None

    def touched(self, at: TemporalValue | None = None) -> Todo:
        """Return a copy with ``changed`` set to ``at`` (default: now).

        Returns
        -------
        Todo
            Updated copy; ``created`` is filled in when missing.
        """
        stamp = at or TemporalValue.now()
        return msgspec.structs.replace(self, created=self.created or stamp, changed=stamp)


def todo_key(todo: Todo) -> int | None:
    """Return the store key of ``todo``."""
    return todo.id


__all__ = ["Complexity", "Priority", "Project", "Task", "Todo", "todo_key"]
