# taskmaster/models/task.py

from datetime import date

from sqlalchemy import Boolean, Column, Date, Integer, String, Text

from taskmaster.db import Base


class Task(Base):
    """
    Row of the ``tasks`` table.

    Built without explicit values, a task is incomplete and created today.
    ``id`` stays ``None`` until the row is inserted.
    """

    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_date = Column(Date, nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)

    def __init__(self, **kwargs):
        if kwargs.get("is_completed") is None:
            kwargs["is_completed"] = False
        if kwargs.get("created_date") is None:
            kwargs["created_date"] = date.today()
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return (
            f"Task(id={self.id}, title={self.title!r}, description={self.description!r}, "
            f"created_date={self.created_date}, is_completed={self.is_completed})"
        )
