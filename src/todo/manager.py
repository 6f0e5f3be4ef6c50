"""The in-memory task list and its mutations."""

import logging
from typing import Iterator

from .core import clean_description, find_index, next_id
from .errors import AlreadyCompleted, EmptyDescription, NotFound, SaveError
from .models import Task
from .storage import TaskStorage

logger = logging.getLogger(__name__)


class TodoManager:
    """Owns the ordered task list for one program run.

    The list is loaded from ``storage`` once, on construction. Every mutating
    call writes the whole list back before returning. When that write fails a
    SaveError is raised, but the in-memory change is kept.
    """

    def __init__(self, storage: TaskStorage) -> None:
        self._storage = storage
        last_id, self._tasks = storage.load()
        self._last_id = max([last_id] + [t.id for t in self._tasks])

    @property
    def storage(self) -> TaskStorage:
        return self._storage

    # -------------------- queries --------------------
    def list_tasks(self) -> Iterator[Task]:
        """Iterate over the tasks in creation order. Each call starts afresh."""
        return iter(tuple(self._tasks))

    def __iter__(self) -> Iterator[Task]:
        return self.list_tasks()

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: int) -> Task:
        idx = find_index(self._tasks, task_id)
        if idx is None:
            raise NotFound(task_id)
        return self._tasks[idx]

    # -------------------- mutations --------------------
    def add(self, description: str) -> int:
        text = clean_description(description)
        if not text:
            raise EmptyDescription()

        task_id = next_id(self._tasks, self._last_id)
        self._tasks.append(Task.create(task_id, text))
        self._last_id = task_id
        logger.info("Added task %d", task_id)
        self._persist(task_id)
        return task_id

    def complete(self, task_id: int) -> Task:
        task = self.get(task_id)
        if task.completed:
            raise AlreadyCompleted(task_id)

        task.mark_complete()
        logger.info("Completed task %d", task_id)
        self._persist(task_id)
        return task

    def remove(self, task_id: int) -> Task:
        idx = find_index(self._tasks, task_id)
        if idx is None:
            raise NotFound(task_id)

        task = self._tasks.pop(idx)
        logger.info("Removed task %d", task_id)
        self._persist(task_id)
        return task

    def _persist(self, task_id: int) -> None:
        try:
            self._storage.save(list(self._tasks), self._last_id)
        except OSError as exc:
            logger.error("Could not save tasks to %r: %s", self._storage, exc)
            raise SaveError(task_id) from exc
