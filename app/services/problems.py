from __future__ import annotations

import uuid
from typing import List, Optional

from app.db.json_store import JsonStore, Record
from app.models.auth import Identity
from app.services.activity import ActivityLog, utcnow_iso


class ProblemDesk:
    """Questions libres des usagers ("Ask your problem"), traitées par un admin."""

    def __init__(self, store: JsonStore, activity: ActivityLog) -> None:
        self.store = store
        self.activity = activity

    def submit(self, identity: Identity, problem: str, category: Optional[str] = None) -> Record:
        record = {
            "id": f"prob-{uuid.uuid4().hex[:12]}",
            "userId": identity.id,
            "userName": identity.name,
            "userEmail": identity.email,
            "problem": problem.strip(),
            "category": (category or "").strip() or "general",
            "status": "pending",
            "submittedAt": utcnow_iso(),
        }
        self.store.append(record)
        self.activity.record(identity, "problem_submitted", {"problemId": record["id"], "category": record["category"]})
        return record

    def newest_first(self) -> List[Record]:
        return list(reversed(self.store.read_all()))
