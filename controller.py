# controller.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from schema import DEFAULT_GOAL, RecommendationRequest, RecommendationResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong while fetching the recommendation. Please try again."


# -----------------------
# Fetch lifecycle
# -----------------------
@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    request: RecommendationRequest
    token: int


@dataclass(frozen=True)
class Success:
    result: RecommendationResponse


@dataclass(frozen=True)
class Failed:
    message: str


Phase = Union[Idle, Loading, Success, Failed]

RecommendFn = Callable[[str, str], RecommendationResponse]


class RecommendationController:
    """
    Holds the form inputs and the lifecycle of the latest request.

    Every issued request gets a token; a result is only applied when its token
    is still the latest one, so reset() or a newer submission wins over a slow reply.
    """

    def __init__(self, recommend_fn: Optional[RecommendFn] = None) -> None:
        if recommend_fn is None:
            import recommender
            recommend_fn = recommender.recommend
        self._recommend = recommend_fn
        self.idea_text = ""
        self.optimization_goal = DEFAULT_GOAL
        self.phase: Phase = Idle()
        self._token = 0

    def update_idea_text(self, text: str) -> None:
        self.idea_text = text

    def update_goal(self, goal: str) -> None:
        self.optimization_goal = goal

    @property
    def busy(self) -> bool:
        return isinstance(self.phase, Loading)

    @property
    def can_submit(self) -> bool:
        return bool(self.idea_text.strip()) and not self.busy

    def begin(self) -> Optional[int]:
        """Enter Loading for the current inputs; returns the request token, or None if nothing was issued."""
        if not self.can_submit:
            return None
        try:
            request = RecommendationRequest(
                idea_description=self.idea_text,
                optimization_goal=self.optimization_goal,
            )
        except ValueError as e:
            logger.error("Rejected submission: %s", e)
            self.phase = Failed(GENERIC_ERROR)
            return None
        self._token += 1
        self.phase = Loading(request=request, token=self._token)
        return self._token

    def settle(self, token: int) -> Phase:
        """Run the request issued under `token` and apply its outcome if it is still current."""
        phase = self.phase
        if not isinstance(phase, Loading) or phase.token != token:
            return self.phase

        req = phase.request
        try:
            outcome: Phase = Success(self._recommend(req.idea_description, req.optimization_goal))
        except Exception as e:
            logger.error("Recommendation failed: %s", e)
            outcome = Failed(GENERIC_ERROR)

        if token != self._token:
            logger.info("Discarding stale result for request %d (latest is %d)", token, self._token)
            return self.phase
        self.phase = outcome
        return self.phase

    def submit(self) -> Phase:
        token = self.begin()
        if token is None:
            return self.phase
        return self.settle(token)

    def reset(self) -> None:
        # bumping the token orphans any request still in flight
        self._token += 1
        self.phase = Idle()
        self.idea_text = ""
