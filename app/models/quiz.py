from typing import List, Optional
from pydantic import BaseModel, Field


class QuestionOut(BaseModel):
    id: str
    prompt: str = Field(..., description="Énoncé de la question")
    options: List[str] = Field(..., description="Les 4 propositions")
    # On ne renvoie pas correctIndex côté client tant que le quiz n'est pas soumis


class ResultOut(BaseModel):
    correctCount: int
    incorrectCount: int
    total: int
    score: int


class QuizStateOut(BaseModel):
    total: int
    index: int
    question: QuestionOut
    selected: Optional[int] = None
    answered: int
    canGoPrevious: bool
    canGoNext: bool
    isLast: bool
    completed: bool
    result: Optional[ResultOut] = None


class AnswerIn(BaseModel):
    optionIndex: int


class ReviewItemOut(BaseModel):
    index: int
    questionId: str
    prompt: str
    options: List[str]
    correctIndex: int
    chosenIndex: Optional[int] = None
    isCorrect: bool
    explanation: str


class ReviewOut(BaseModel):
    result: ResultOut
    items: List[ReviewItemOut]
