from __future__ import annotations

import json
import logging
import random
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.core.errors import InsufficientData, NotFound, ValidationError

logger = logging.getLogger(__name__)

QUESTIONS_PER_QUIZ = 20
OPTIONS_PER_QUESTION = 4


@dataclass(frozen=True)
class Question:
    id: str
    prompt: str
    options: Tuple[str, ...]
    correct_index: int
    explanation: str = ""


@dataclass(frozen=True)
class QuizResult:
    correct_count: int
    incorrect_count: int
    total: int
    score: int  # pourcentage arrondi


@dataclass(frozen=True)
class ReviewItem:
    index: int
    question: Question
    chosen_index: Optional[int]
    is_correct: bool


def question_from_dict(raw: Dict[str, Any], fallback_id: str) -> Question:
    """
    Format du fichier : {question, options[4], answerIndex, explanation}.
    """
    prompt = raw.get("question") or raw.get("prompt")
    options = raw.get("options")
    correct = raw.get("answerIndex", raw.get("correctOptionIndex"))

    if not isinstance(prompt, str) or not prompt.strip():
        raise ValueError(f"{fallback_id}: question vide")
    if not isinstance(options, list) or len(options) != OPTIONS_PER_QUESTION:
        raise ValueError(f"{fallback_id}: il faut exactement {OPTIONS_PER_QUESTION} options")
    if not isinstance(correct, int) or isinstance(correct, bool) or not 0 <= correct < OPTIONS_PER_QUESTION:
        raise ValueError(f"{fallback_id}: answerIndex hors de [0, {OPTIONS_PER_QUESTION - 1}]")

    return Question(
        id=str(raw.get("id") or fallback_id),
        prompt=prompt.strip(),
        options=tuple(str(o) for o in options),
        correct_index=correct,
        explanation=str(raw.get("explanation") or ""),
    )


def load_question_pool(path: str | Path) -> List[Question]:
    """Charge le pool une fois (tableau JSON). Lève ValueError si mal formé."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: un tableau JSON est attendu")
    pool = [question_from_dict(raw, f"q{i + 1}") for i, raw in enumerate(data)]
    logger.info("loaded %d quiz questions from %s", len(pool), path)
    return pool


class QuizSession:
    """
    Une partie de quiz pour un seul utilisateur.

    - start(pool) tire 20 questions distinctes, dans un ordre aléatoire
    - on ne peut avancer que si la question courante a une réponse
    - reculer est toujours permis (sauf sur la première)
    - go_next() sur la dernière question répondue soumet le quiz
    - une fois soumis, la session est en lecture seule

    Une case de réponse vide vaut None (jamais un index d'option valide).
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self.drawn: List[Question] = []
        self.current_index: int = 0
        self.answers: List[Optional[int]] = []
        self.completed: bool = False
        self._result: Optional[QuizResult] = None

    # ---------- public API ----------

    @property
    def started(self) -> bool:
        return bool(self.drawn)

    @property
    def total(self) -> int:
        return len(self.drawn)

    @property
    def current_question(self) -> Question:
        self._ensure_started()
        return self.drawn[self.current_index]

    @property
    def result(self) -> Optional[QuizResult]:
        return self._result

    def start(self, pool: Sequence[Question]) -> None:
        if len(pool) < QUESTIONS_PER_QUIZ:
            raise InsufficientData(
                f"Not enough questions available. Need {QUESTIONS_PER_QUIZ}, found {len(pool)}."
            )
        # tirage par positions : deux questions identiques du pool restent distinctes
        picked = self._rng.sample(range(len(pool)), QUESTIONS_PER_QUIZ)

        self.drawn = [pool[i] for i in picked]
        self.current_index = 0
        self.answers = [None] * QUESTIONS_PER_QUIZ
        self.completed = False
        self._result = None

    def restart(self, pool: Sequence[Question]) -> None:
        self.start(pool)

    def select_answer(self, option_index: int) -> None:
        self._ensure_active()
        n_options = len(self.current_question.options)
        if not isinstance(option_index, int) or not 0 <= option_index < n_options:
            raise ValidationError(f"Invalid option index (expected 0..{n_options - 1})")
        self.answers[self.current_index] = option_index

    def go_next(self) -> bool:
        """
        Renvoie True si l'état a changé. Sans réponse : aucun effet.
        """
        self._ensure_active()
        if self.answers[self.current_index] is None:
            return False
        if self.current_index == self.total - 1:
            self.submit()
        else:
            self.current_index += 1
        return True

    def go_previous(self) -> bool:
        self._ensure_active()
        if self.current_index == 0:
            return False
        self.current_index -= 1
        return True

    def submit(self) -> QuizResult:
        self._ensure_started()
        if self.completed:
            return self._result  # type: ignore[return-value]
        if self.answers[-1] is None:
            raise ValidationError("Answer the last question before submitting the quiz.")

        correct = sum(
            1 for q, chosen in zip(self.drawn, self.answers)
            if chosen is not None and chosen == q.correct_index
        )
        self._result = QuizResult(
            correct_count=correct,
            incorrect_count=self.total - correct,
            total=self.total,
            score=int(round(correct / self.total * 100)),
        )
        self.completed = True
        return self._result

    def review(self) -> List[ReviewItem]:
        self._ensure_started()
        if not self.completed:
            raise ValidationError("Review is available once the quiz is submitted.")
        return [
            ReviewItem(
                index=i,
                question=q,
                chosen_index=chosen,
                is_correct=chosen is not None and chosen == q.correct_index,
            )
            for i, (q, chosen) in enumerate(zip(self.drawn, self.answers))
        ]

    # ---------- internals ----------

    def _ensure_started(self) -> None:
        if not self.started:
            raise ValidationError("No quiz in progress.")

    def _ensure_active(self) -> None:
        self._ensure_started()
        if self.completed:
            raise ValidationError("The quiz is already completed.")


class QuizRegistry:
    """
    Une QuizSession par session de connexion (clé = token du cookie).
    """

    def __init__(self, pool: Sequence[Question], rng_factory=random.Random) -> None:
        self.pool = list(pool)
        self._rng_factory = rng_factory
        self._sessions: Dict[str, QuizSession] = {}
        self._lock = threading.Lock()

    def start(self, key: str) -> QuizSession:
        # on valide sur une session neuve : un échec ne touche pas la partie en cours
        quiz = QuizSession(rng=self._rng_factory())
        quiz.start(self.pool)
        with self._lock:
            self._sessions[key] = quiz
        return quiz

    def get(self, key: str) -> QuizSession:
        with self._lock:
            quiz = self._sessions.get(key)
        if quiz is None:
            raise NotFound("No quiz in progress. Start a new quiz first.")
        return quiz

    def drop(self, key: Optional[str]) -> None:
        if not key:
            return
        with self._lock:
            self._sessions.pop(key, None)
