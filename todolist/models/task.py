from __future__ import annotations

import datetime as _dt

from pydantic import BaseModel, ConfigDict, Field

# Lower rank sorts first. Priorities outside this table rank after "Low".
PRIORITY_RANKS: dict[str, int] = {"High": 1, "Medium": 2, "Low": 3}
UNRANKED_PRIORITY = len(PRIORITY_RANKS) + 1


class Task(BaseModel):
    """A single to-do item as held by the store and written to the task file.

    - Attributes use snake_case in Python and camelCase keys in the file
      (``dueDate``, ``isComplete``); either spelling is accepted on input
    - ``priority`` is free text; "High", "Medium" and "Low" are the labels the
      UI offers, but nothing here enforces them
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    due_date: _dt.date = Field(alias="dueDate")
    priority: str
    category: str
    is_complete: bool = Field(default=False, alias="isComplete")

    def priority_rank(self) -> int:
        return PRIORITY_RANKS.get(self.priority, UNRANKED_PRIORITY)

    def matches(self, query: str) -> bool:
        needle = query.lower()
        return needle in self.title.lower() or needle in self.description.lower()


__all__ = ["PRIORITY_RANKS", "UNRANKED_PRIORITY", "Task"]
