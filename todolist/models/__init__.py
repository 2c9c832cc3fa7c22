from __future__ import annotations

from .task import PRIORITY_RANKS, UNRANKED_PRIORITY, Task

__all__ = ["PRIORITY_RANKS", "UNRANKED_PRIORITY", "Task"]
