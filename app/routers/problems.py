from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.core.deps import get_current_identity, get_problem_desk
from app.models.auth import Identity, OkOut
from app.services.problems import ProblemDesk

router = APIRouter(prefix="/api", tags=["problems"])


class ProblemIn(BaseModel):
    problem: str = Field(..., min_length=1, max_length=5000)
    category: Optional[str] = Field(default=None, max_length=120)


@router.post("/problem", response_model=OkOut)
def submit_problem(
    body: ProblemIn,
    identity: Identity = Depends(get_current_identity),
    desk: ProblemDesk = Depends(get_problem_desk),
):
    desk.submit(identity, body.problem, body.category)
    return OkOut(message="Problem submitted successfully")
