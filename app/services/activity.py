from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.db.json_store import DataStores, JsonStore, Record
from app.models.auth import Identity


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ActivityLog:
    """Journal d'audit (activities.json), en ajout seul."""

    def __init__(self, store: JsonStore) -> None:
        self.store = store

    def record(self, identity: Identity, action: str, details: Optional[Dict[str, Any]] = None) -> Record:
        return self.store.append({
            "userId": identity.id,
            "userName": identity.name,
            "action": action,
            "timestamp": utcnow_iso(),
            "details": details or {},
        })

    def recent(self, limit: int = 100) -> List[Record]:
        return list(reversed(self.store.read_all()))[:limit]


# =========================================================
# Reporting admin
# =========================================================
def compute_stats(stores: DataStores) -> Dict[str, Any]:
    users = stores.users.read_all()
    activities = stores.activities.read_all()
    uploads = stores.uploads.read_all()
    problems = stores.problems.read_all()

    actions = Counter(a.get("action") for a in activities)

    return {
        "totalUsers": sum(1 for u in users if u.get("role") == "user"),
        "totalAdmins": sum(1 for u in users if u.get("role") == "admin"),
        "totalActivities": len(activities),
        "totalUploads": len(uploads),
        "totalProblems": len(problems),
        "recentLogins": [a for a in activities if a.get("action") == "login"][-10:],
        "aiQueries": actions.get("assistant_query", 0),
        "chatbotQueries": actions.get("chatbot_query", 0),
        "quizzesCompleted": actions.get("quiz_completed", 0),
        "uploadsByCategory": dict(Counter(u.get("category", "general") for u in uploads)),
        "problemsByStatus": dict(Counter(p.get("status", "pending") for p in problems)),
    }


def users_with_stats(stores: DataStores) -> List[Dict[str, Any]]:
    activities = stores.activities.read_all()
    out = []
    for u in stores.users.read_all():
        mine = [a for a in activities if a.get("userId") == u.get("id")]
        logins = [a for a in mine if a.get("action") == "login"]
        row = {k: v for k, v in u.items() if k != "passwordHash"}
        row.update({
            "loginCount": len(logins),
            "lastLogin": logins[-1]["timestamp"] if logins else None,
            "totalActivities": len(mine),
        })
        out.append(row)
    return out
