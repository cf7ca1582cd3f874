from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ActivityLog:
    id: str
    user_id: str
    activity: str
    description: Optional[str]
    created_at: datetime
