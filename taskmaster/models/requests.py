# taskmaster/models/requests.py
from datetime import date
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# -----------------------------
# Task payloads (camelCase on the wire)
# -----------------------------
class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    created_date: Optional[date] = Field(default=None, alias="createdDate")
    is_completed: Optional[bool] = Field(default=None, alias="isCompleted")

    def to_columns(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "created_date": self.created_date or date.today(),
            "is_completed": self.is_completed,
        }


class TaskEdit(BaseModel):
    """
    Full update of an existing task.

    ``title`` and ``description`` always overwrite the stored row (an omitted
    description clears it). ``createdDate`` and ``isCompleted`` only apply when
    the client actually sent a non-null value; otherwise the stored value stays.
    """

    id: int
    title: str
    description: Optional[str] = None
    created_date: Optional[date] = Field(default=None, alias="createdDate")
    is_completed: Optional[bool] = Field(default=None, alias="isCompleted")

    def changes(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
        }
        for name in ("created_date", "is_completed"):
            value = getattr(self, name)
            if name in self.model_fields_set and value is not None:
                values[name] = value
        return values


# -----------------------------
# Envelopes (snake_case on the wire)
# -----------------------------
class TaskStatusUpdate(BaseModel):
    id: int
    is_completed: bool


class TaskDelete(BaseModel):
    id: int


# -----------------------------
# Responses
# -----------------------------
class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    created_date: date = Field(
        validation_alias=AliasChoices("createdDate", "created_date"),
        serialization_alias="createdDate",
    )
    is_completed: bool = Field(
        validation_alias=AliasChoices("isCompleted", "is_completed"),
        serialization_alias="isCompleted",
    )


class OperationResult(BaseModel):
    success: bool
    message: str
