import logging

from fastapi import APIRouter, Depends

from app.core.deps import get_activity, get_current_identity, get_quiz_registry, get_session_token
from app.models.auth import Identity
from app.models.quiz import (
    AnswerIn,
    QuestionOut,
    QuizStateOut,
    ResultOut,
    ReviewItemOut,
    ReviewOut,
)
from app.services.activity import ActivityLog
from app.services.quiz_engine import Question, QuizRegistry, QuizResult, QuizSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/quiz", tags=["quiz"])


# =========================================================
# Helpers
# =========================================================
def _to_public_question(q: Question) -> QuestionOut:
    return QuestionOut(id=q.id, prompt=q.prompt, options=list(q.options))


def _to_result(r: QuizResult) -> ResultOut:
    return ResultOut(
        correctCount=r.correct_count,
        incorrectCount=r.incorrect_count,
        total=r.total,
        score=r.score,
    )


def _state(quiz: QuizSession) -> QuizStateOut:
    idx = quiz.current_index
    answered_here = quiz.answers[idx] is not None
    return QuizStateOut(
        total=quiz.total,
        index=idx,
        question=_to_public_question(quiz.current_question),
        selected=quiz.answers[idx],
        answered=sum(1 for a in quiz.answers if a is not None),
        canGoPrevious=not quiz.completed and idx > 0,
        canGoNext=not quiz.completed and answered_here,
        isLast=idx == quiz.total - 1,
        completed=quiz.completed,
        result=_to_result(quiz.result) if quiz.result else None,
    )


def _record_completion(quiz: QuizSession, was_completed: bool, identity: Identity, activity: ActivityLog) -> None:
    if was_completed or not quiz.completed or quiz.result is None:
        return
    activity.record(identity, "quiz_completed", {
        "score": quiz.result.score,
        "correctCount": quiz.result.correct_count,
        "total": quiz.result.total,
    })
    logger.info("quiz completed user=%s score=%d", identity.id, quiz.result.score)


# =========================================================
# Routes
# =========================================================
@router.post("/start", response_model=QuizStateOut)
def start_quiz(
    token: str = Depends(get_session_token),
    identity: Identity = Depends(get_current_identity),
    quizzes: QuizRegistry = Depends(get_quiz_registry),
):
    return _state(quizzes.start(token))


@router.post("/restart", response_model=QuizStateOut)
def restart_quiz(
    token: str = Depends(get_session_token),
    identity: Identity = Depends(get_current_identity),
    quizzes: QuizRegistry = Depends(get_quiz_registry),
):
    # nouveau tirage : l'ancienne partie est abandonnée
    return _state(quizzes.start(token))


@router.get("", response_model=QuizStateOut)
def get_quiz(
    token: str = Depends(get_session_token),
    identity: Identity = Depends(get_current_identity),
    quizzes: QuizRegistry = Depends(get_quiz_registry),
):
    return _state(quizzes.get(token))


@router.post("/answer", response_model=QuizStateOut)
def answer(
    body: AnswerIn,
    token: str = Depends(get_session_token),
    identity: Identity = Depends(get_current_identity),
    quizzes: QuizRegistry = Depends(get_quiz_registry),
):
    quiz = quizzes.get(token)
    quiz.select_answer(body.optionIndex)
    return _state(quiz)


@router.post("/next", response_model=QuizStateOut)
def next_question(
    token: str = Depends(get_session_token),
    identity: Identity = Depends(get_current_identity),
    quizzes: QuizRegistry = Depends(get_quiz_registry),
    activity: ActivityLog = Depends(get_activity),
):
    quiz = quizzes.get(token)
    was_completed = quiz.completed
    quiz.go_next()
    _record_completion(quiz, was_completed, identity, activity)
    return _state(quiz)


@router.post("/previous", response_model=QuizStateOut)
def previous_question(
    token: str = Depends(get_session_token),
    identity: Identity = Depends(get_current_identity),
    quizzes: QuizRegistry = Depends(get_quiz_registry),
):
    quiz = quizzes.get(token)
    quiz.go_previous()
    return _state(quiz)


@router.post("/submit", response_model=QuizStateOut)
def submit_quiz(
    token: str = Depends(get_session_token),
    identity: Identity = Depends(get_current_identity),
    quizzes: QuizRegistry = Depends(get_quiz_registry),
    activity: ActivityLog = Depends(get_activity),
):
    quiz = quizzes.get(token)
    was_completed = quiz.completed
    quiz.submit()
    _record_completion(quiz, was_completed, identity, activity)
    return _state(quiz)


@router.get("/review", response_model=ReviewOut)
def review_quiz(
    token: str = Depends(get_session_token),
    identity: Identity = Depends(get_current_identity),
    quizzes: QuizRegistry = Depends(get_quiz_registry),
):
    quiz = quizzes.get(token)
    items = [
        ReviewItemOut(
            index=it.index,
            questionId=it.question.id,
            prompt=it.question.prompt,
            options=list(it.question.options),
            correctIndex=it.question.correct_index,
            chosenIndex=it.chosen_index,
            isCorrect=it.is_correct,
            explanation=it.question.explanation,
        )
        for it in quiz.review()
    ]
    return ReviewOut(result=_to_result(quiz.result), items=items)
