from fastapi import APIRouter, Depends

from app.core.deps import get_activity, get_current_identity
from app.models.assistant import AssistantOut, AssistantQuery
from app.models.auth import Identity
from app.services.activity import ActivityLog
from app.services.assistant import lookup, match_topic

router = APIRouter(prefix="/api", tags=["assistant"])


@router.post("/assistant", response_model=AssistantOut)
def ask_assistant(
    body: AssistantQuery,
    identity: Identity = Depends(get_current_identity),
    activity: ActivityLog = Depends(get_activity),
):
    activity.record(identity, "assistant_query", {"query": body.query, "topic": match_topic(body.query)})
    return AssistantOut(data=lookup(body.query))
