from typing import List
from pydantic import BaseModel, Field


class AssistantQuery(BaseModel):
    query: str = Field(..., min_length=1, max_length=2000)


class TopicRecord(BaseModel):
    summary: str
    documents: List[str] = Field(default_factory=list)
    fees: str = ""
    steps: List[str] = Field(default_factory=list)
    timeline: str = ""
    online: str = ""
    offline: str = ""
    tips: List[str] = Field(default_factory=list)
    sources: List[str] = Field(default_factory=list)


class AssistantOut(BaseModel):
    success: bool = True
    data: TopicRecord
