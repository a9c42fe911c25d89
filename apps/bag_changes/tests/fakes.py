"""Grading clients used in place of the external grading service."""

from apps.bag_changes.services.exceptions import GradingUnavailableError
from apps.bag_changes.services.grading import parse_grade

BASE_YEAR = 2015

LETTER_THRESHOLDS = (
    (90, 'A'),
    (80, 'B'),
    (70, 'C'),
    (60, 'D'),
)


def letter_for(score):
    for threshold, letter in LETTER_THRESHOLDS:
        if score >= threshold:
            return letter
    return 'F'


class FakeGradingClient:
    """Deterministic grader: newer clubs and matching flexes score higher."""

    def grade_bag(self, *, user_id, clubs):
        if not clubs:
            return parse_grade({'overallScore': 0, 'letterGrade': 'F', 'componentScores': {}})

        years = [club.get('year') or BASE_YEAR for club in clubs]
        age_score = 60 + (sum(years) / len(years) - BASE_YEAR) * 3
        flexes = {club.get('shaft_flex') for club in clubs}
        flex_score = 100 if len(flexes) == 1 else 70

        overall = round(age_score, 2)
        return parse_grade({
            'overallScore': overall,
            'letterGrade': letter_for(overall),
            'componentScores': {
                'age': round(age_score, 2),
                'flexConsistency': flex_score,
                'loftGapping': 75,
            },
        })


class FailingGradingClient:
    """Grader that is always down."""

    def grade_bag(self, *, user_id, clubs):
        raise GradingUnavailableError('Failed to grade bag')


class FlakyGradingClient(FakeGradingClient):
    """Grades normally until call number ``fail_on_call``."""

    def __init__(self, fail_on_call=2):
        self.fail_on_call = fail_on_call
        self.calls = 0

    def grade_bag(self, *, user_id, clubs):
        self.calls += 1
        if self.calls >= self.fail_on_call:
            raise GradingUnavailableError('Failed to grade bag')
        return super().grade_bag(user_id=user_id, clubs=clubs)
