"""
GRADE POINTS - Letter grade to quality-point resolution

GRADE MAPPING (both scales):
A = 4.0, B = 3.0, C = 2.0, D = 1.0, F = 0.0

WEIGHTING:
✅ 5.0 scale: Honors and AP courses get +1.0 on any passing letter
✅ 4.0 scale: no bonus, ever. Weighting only exists on the 5.0 scale
✅ Result is capped at the scale maximum
❌ Dual Enrollment and College Prep are NOT weighted

Pure functions; safe to call repeatedly.
"""

import math
from typing import Iterable, Tuple, Union

from ..models.enums import CourseLevel, GpaScale, LetterGrade
from ..models.records import Course, HONORS_OR_AP_LEVELS

GRADE_POINTS = {
    "A": 4.0,
    "B": 3.0,
    "C": 2.0,
    "D": 1.0,
    "F": 0.0,
}

HONORS_BONUS = 1.0

# (letter, credits, is_honors) as entered on the grade calculator widget
GradeEntry = Tuple[str, float, bool]


def _value(v: Union[str, LetterGrade, GpaScale, CourseLevel]) -> str:
    return v.value if hasattr(v, "value") else str(v)


def round_half_up(value: float, places: int = 2) -> float:
    """Round like ``Math.round(x * 100) / 100``: halves go up, not to even"""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def is_honors_or_ap(level: Union[str, CourseLevel]) -> bool:
    return _value(level) in HONORS_OR_AP_LEVELS


def resolve_grade_points(
    letter_grade: Union[str, LetterGrade],
    gpa_scale: Union[str, GpaScale],
    is_honors_or_ap: bool = False,
) -> float:
    """
    Convert a letter grade into quality points

    Args:
        letter_grade: A, B, C, D or F
        gpa_scale: "4.0" or "5.0"
        is_honors_or_ap: True for Honors / Advanced Placement courses

    Returns:
        Points between 0.0 and the scale maximum
    """
    letter = _value(letter_grade)
    scale = _value(gpa_scale)

    points = GRADE_POINTS[letter]
    if scale == GpaScale.WEIGHTED.value and is_honors_or_ap and letter != LetterGrade.F.value:
        points += HONORS_BONUS

    return min(points, float(scale))


def resolve_for_course(
    letter_grade: Union[str, LetterGrade],
    gpa_scale: Union[str, GpaScale],
    course: Course,
) -> float:
    """Resolve points using the course level to decide the honors bonus"""
    return resolve_grade_points(letter_grade, gpa_scale, course.is_honors_or_ap)


def percentage_to_letter(percentage: float) -> str:
    """Convert a percentage to a letter grade (10-point bands)"""
    if percentage >= 90:
        return "A"
    if percentage >= 80:
        return "B"
    if percentage >= 70:
        return "C"
    if percentage >= 60:
        return "D"
    return "F"


def calculate_simple_gpa(
    entries: Iterable[GradeEntry], gpa_scale: Union[str, GpaScale] = GpaScale.UNWEIGHTED
) -> float:
    """
    Credit-weighted GPA straight from letter grades

    Used by the grade-entry preview, where no points are stored yet.
    Returns 0 for an empty list.
    """
    points = []
    credits = []
    for letter, course_credits, is_honors in entries:
        points.append(resolve_grade_points(letter, gpa_scale, bool(is_honors)) * course_credits)
        credits.append(course_credits)

    total_credits = math.fsum(credits)
    if total_credits <= 0:
        return 0.0
    return round_half_up(math.fsum(points) / total_credits)


def calculate_total_credits(entries: Iterable[GradeEntry]) -> float:
    return math.fsum(course_credits for _, course_credits, _ in entries)


__all__ = [
    "GRADE_POINTS",
    "HONORS_BONUS",
    "round_half_up",
    "is_honors_or_ap",
    "resolve_grade_points",
    "resolve_for_course",
    "percentage_to_letter",
    "calculate_simple_gpa",
    "calculate_total_credits",
]
