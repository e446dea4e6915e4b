from .grade_points import (
    calculate_simple_gpa,
    calculate_total_credits,
    is_honors_or_ap,
    percentage_to_letter,
    resolve_for_course,
    resolve_grade_points,
    round_half_up,
)
from .gpa import GPACalculator, TranscriptAggregate, earned_subject_credits, pair_courses_with_grades
from .graduation import (
    GRADUATION_REQUIREMENTS,
    GraduationRequirementEvaluator,
    check_credit_minimum,
    transcript_status,
    validate_transcript_generation,
)

__all__ = [
    "calculate_simple_gpa",
    "calculate_total_credits",
    "is_honors_or_ap",
    "percentage_to_letter",
    "resolve_for_course",
    "resolve_grade_points",
    "round_half_up",
    "GPACalculator",
    "TranscriptAggregate",
    "earned_subject_credits",
    "pair_courses_with_grades",
    "GRADUATION_REQUIREMENTS",
    "GraduationRequirementEvaluator",
    "check_credit_minimum",
    "transcript_status",
    "validate_transcript_generation",
]
