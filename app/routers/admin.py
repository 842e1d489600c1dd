from fastapi import APIRouter, Depends

from app.core.deps import get_activity, get_problem_desk, get_stores, require_admin
from app.db.json_store import DataStores
from app.models.auth import Identity
from app.services.activity import ActivityLog, compute_stats, users_with_stats
from app.services.problems import ProblemDesk

router = APIRouter(prefix="/api/admin", tags=["admin"])

MAX_ACTIVITIES = 100


@router.get("/stats")
def admin_stats(
    stores: DataStores = Depends(get_stores),
    admin: Identity = Depends(require_admin),
):
    return {"success": True, "stats": compute_stats(stores)}


@router.get("/activities")
def admin_activities(
    activity: ActivityLog = Depends(get_activity),
    admin: Identity = Depends(require_admin),
):
    return {"success": True, "activities": activity.recent(MAX_ACTIVITIES)}


@router.get("/users")
def admin_users(
    stores: DataStores = Depends(get_stores),
    admin: Identity = Depends(require_admin),
):
    # jamais le hash du mot de passe
    return {"success": True, "users": users_with_stats(stores)}


@router.get("/problems")
def admin_problems(
    desk: ProblemDesk = Depends(get_problem_desk),
    admin: Identity = Depends(require_admin),
):
    return {"success": True, "problems": desk.newest_first()}
