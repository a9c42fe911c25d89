"""
Bag grading client.

The grading algorithm lives in an external service. Bag changes call it
with the golfer's current active clubs (read inside the running
transaction) and get back an overall score, a letter grade and
per-category component scores.

The client class is configurable with the BAG_GRADING_CLIENT setting.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import requests
from django.conf import settings
from django.utils.module_loading import import_string

from apps.accounts.models import User
from apps.clubs.models import Club, ClubStatus
from .exceptions import GradingUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BagGrade:
    overall_score: float
    letter_grade: str
    component_scores: dict = field(default_factory=dict)

    def component(self, name: str) -> float:
        """Score for one category, 0 when the grader did not report it."""
        return self.component_scores.get(name) or 0

    def as_dict(self) -> dict:
        return {
            'overall_score': self.overall_score,
            'letter_grade': self.letter_grade,
            'component_scores': dict(self.component_scores),
        }


def _snake_case(name: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


def parse_grade(payload: dict) -> BagGrade:
    """
    Build a BagGrade from a grading service response.

    Accepts camelCase (overallScore, componentScores) or snake_case keys.

    Raises:
        GradingUnavailableError: If the payload has no usable overall score
    """
    if not isinstance(payload, dict):
        raise GradingUnavailableError("Grading service returned an unexpected payload")

    overall = payload.get('overallScore', payload.get('overall_score'))
    if overall is None:
        raise GradingUnavailableError("Grading service response is missing the overall score")

    components = payload.get('componentScores', payload.get('component_scores')) or {}
    try:
        return BagGrade(
            overall_score=float(overall),
            letter_grade=str(payload.get('letterGrade', payload.get('letter_grade', ''))),
            component_scores={_snake_case(k): float(v) for k, v in components.items() if v is not None},
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise GradingUnavailableError(f"Grading service returned malformed scores: {e}")


def serialize_bag(user: User) -> list[dict]:
    """Active clubs in the shape sent to the grading service."""
    clubs = Club.objects.filter(user=user, status=ClubStatus.ACTIVE).order_by('id')
    return [{'club_id': str(club.id), **club.spec_data()} for club in clubs]


class HttpGradingClient:
    """Grades a bag by POSTing it to the grading service."""

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        self.url = url or settings.GRADING_SERVICE_URL
        self.timeout = timeout or settings.GRADING_SERVICE_TIMEOUT

    def grade_bag(self, *, user_id, clubs: list[dict]) -> BagGrade:
        try:
            response = requests.post(
                self.url,
                json={'userId': str(user_id), 'clubs': clubs},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Grading service call failed for user %s: %s", user_id, e)
            raise GradingUnavailableError("Failed to grade bag") from e

        return parse_grade(payload)


def get_grading_client():
    """Instantiate the client named by settings.BAG_GRADING_CLIENT."""
    return import_string(settings.BAG_GRADING_CLIENT)()


def grade_user_bag(user: User, grading_client=None) -> BagGrade:
    """Grade the golfer's current active clubs."""
    client = grading_client or get_grading_client()
    return client.grade_bag(user_id=user.pk, clubs=serialize_bag(user))
