# taskmaster/services/task_service.py

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from taskmaster.db import session_scope
from taskmaster.models.task import Task

logger = logging.getLogger("task-service")


class TaskStorageError(Exception):
    """A storage fault inside one gateway operation. The transaction was rolled back."""

    def __init__(self, operation: str):
        super().__init__(f"Storage fault during {operation}")
        self.operation = operation


class TaskService:
    """
    Single-table persistence for tasks.

    Every call opens its own session and wraps its read/mutate/write sequence
    in one transaction. Not-found is reported as ``False`` / ``None``; storage
    faults are logged and raised as ``TaskStorageError``.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    def _scope(self):
        return session_scope(self._session_factory)

    def _fault(self, operation: str, exc: Exception) -> TaskStorageError:
        logger.exception("Task %s failed: %s", operation, exc)
        return TaskStorageError(operation)

    # -----------------------------
    # Queries
    # -----------------------------
    def get_all_tasks(self) -> List[Task]:
        """All tasks, newest ``created_date`` first."""
        try:
            with self._scope() as session:
                return (
                    session.query(Task)
                    .order_by(Task.created_date.desc(), Task.id.asc())
                    .all()
                )
        except SQLAlchemyError as exc:
            raise self._fault("list", exc) from exc

    def get_task_by_id(self, task_id: int) -> Optional[Task]:
        try:
            with self._scope() as session:
                return session.get(Task, task_id)
        except SQLAlchemyError as exc:
            raise self._fault("lookup", exc) from exc

    # -----------------------------
    # Mutations
    # -----------------------------
    def save_task(self, task: Task) -> Task:
        """Insert a new task; the returned task carries its generated id."""
        try:
            with self._scope() as session:
                session.add(task)
                session.flush()
                session.refresh(task)
        except SQLAlchemyError as exc:
            raise self._fault("save", exc) from exc

        logger.info("Task saved | id=%s", task.id)
        return task

    def update_task_status(self, task_id: int, is_completed: bool) -> bool:
        try:
            with self._scope() as session:
                task = session.get(Task, task_id)
                if task is None:
                    return False
                task.is_completed = is_completed
        except SQLAlchemyError as exc:
            raise self._fault("status update", exc) from exc

        logger.info("Task status updated | id=%s | is_completed=%s", task_id, is_completed)
        return True

    def update_task(self, task_id: int, changes: Dict[str, Any]) -> Optional[Task]:
        """
        Merge ``changes`` (column name -> value) into the stored row.

        Only the keys present are written, so callers decide which fields are
        left untouched. Returns the merged task, or ``None`` if ``task_id`` is
        unknown.
        """
        try:
            with self._scope() as session:
                task = session.get(Task, task_id)
                if task is None:
                    return None
                for column, value in changes.items():
                    setattr(task, column, value)
        except SQLAlchemyError as exc:
            raise self._fault("update", exc) from exc

        logger.info("Task updated | id=%s | fields=%s", task_id, sorted(changes))
        return task

    def delete_task(self, task_id: int) -> bool:
        try:
            with self._scope() as session:
                task = session.get(Task, task_id)
                if task is None:
                    return False
                session.delete(task)
        except SQLAlchemyError as exc:
            raise self._fault("delete", exc) from exc

        logger.info("Task deleted | id=%s", task_id)
        return True


task_service = TaskService()
