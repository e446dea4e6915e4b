"""
GRADUATION REQUIREMENTS - Subject-distribution check and transcript readiness

REQUIREMENT TABLE (24 credits):
English 4, Mathematics 4, Science 3, Social Studies 3,
Foreign Language 2, Fine Arts 1, Physical Education 1, Electives 6

RULES:
- Subjects outside the seven named categories count as Electives
- Only graded courses count as earned; in-progress courses do not
- Over-fulfilled categories are not capped when totalling earned credits
- Progress is clamped at 100%

The fixed 24-credit table is separate from each student's own
``min_credits_for_graduation``, which ``check_credit_minimum`` handles.
"""

import logging
import math
from typing import Dict, Iterable, Mapping

from ..models.calculations import (
    CreditMinimumCheck,
    GraduationRequirements,
    RequirementProgress,
    RequirementsSummary,
    TranscriptValidation,
)
from ..models.enums import TranscriptStatus
from ..models.records import CourseWithGrade, Student
from .gpa import earned_subject_credits
from .grade_points import round_half_up

logger = logging.getLogger(__name__)

ELECTIVES = "Electives"

GRADUATION_REQUIREMENTS: Dict[str, float] = {
    "English": 4.0,
    "Mathematics": 4.0,
    "Science": 3.0,
    "Social Studies": 3.0,
    "Foreign Language": 2.0,
    "Fine Arts": 1.0,
    "Physical Education": 1.0,
    ELECTIVES: 6.0,
}

COMPLETE_TRANSCRIPT_COURSE_COUNT = 20


class GraduationRequirementEvaluator:
    """Compare earned subject credits against the graduation requirement table"""

    def __init__(self, requirements: Mapping[str, float] = GRADUATION_REQUIREMENTS):
        self.requirements = dict(requirements)

    @property
    def total_required(self) -> float:
        return math.fsum(self.requirements.values())

    def category_for(self, subject: str) -> str:
        """Requirement bucket a course subject counts toward"""
        if subject in self.requirements and subject != ELECTIVES:
            return subject
        return ELECTIVES

    def evaluate(self, subject_credits: Mapping[str, float]) -> GraduationRequirements:
        """
        Evaluate graduation progress

        Args:
            subject_credits: Earned credit hours keyed by course subject

        Returns:
            GraduationRequirements with per-category progress and a summary
        """
        earned: Dict[str, list] = {category: [] for category in self.requirements}
        for subject, credit_hours in subject_credits.items():
            category = self.category_for(subject)
            earned.setdefault(category, []).append(credit_hours)

        requirements = {
            category: RequirementProgress(
                required=self.requirements.get(category, 0.0),
                earned=math.fsum(values),
            )
            for category, values in earned.items()
        }

        total_required = self.total_required
        total_earned = math.fsum(req.earned for req in requirements.values())

        progress = 0.0
        if total_required > 0:
            progress = min(100.0, round_half_up(total_earned / total_required * 100))

        logger.debug(
            f"🎓 Earned {total_earned:.2f} of {total_required:.2f} required credits ({progress:.2f}%)"
        )

        summary = RequirementsSummary(
            total_required=total_required,
            total_earned=total_earned,
            meets_requirements=total_earned >= total_required,
            credits_remaining=max(0.0, total_required - total_earned),
            progress=progress,
        )
        return GraduationRequirements(requirements=requirements, summary=summary)

    def evaluate_courses(self, pairs: Iterable[CourseWithGrade]) -> GraduationRequirements:
        return self.evaluate(earned_subject_credits(pairs))


def check_credit_minimum(student: Student, pairs: Iterable[CourseWithGrade]) -> CreditMinimumCheck:
    """Compare earned credits against the student's own overall credit minimum"""
    earned = math.fsum(pair.course.credit_hours for pair in pairs if pair.is_graded)
    minimum = student.min_credits_for_graduation
    return CreditMinimumCheck(
        min_credits_for_graduation=minimum,
        earned_credits=earned,
        meets_minimum=earned >= minimum,
        credits_remaining=max(0.0, minimum - earned),
    )


def transcript_status(course_count: int) -> TranscriptStatus:
    """0 courses: empty, 1-19: partial, 20 or more: complete"""
    if course_count <= 0:
        return TranscriptStatus.EMPTY
    if course_count < COMPLETE_TRANSCRIPT_COURSE_COUNT:
        return TranscriptStatus.PARTIAL
    return TranscriptStatus.COMPLETE


def validate_transcript_generation(course_count: int) -> TranscriptValidation:
    """Decide whether a transcript can be generated and which messages to show"""
    issues = []
    warnings = []

    if course_count <= 0:
        issues.append("No courses found for this student")
    elif course_count < COMPLETE_TRANSCRIPT_COURSE_COUNT:
        plural = "" if course_count == 1 else "s"
        warnings.append(
            f"This is a partial transcript with {course_count} course{plural}. "
            "Standard graduation typically requires 20+ credits."
        )

    return TranscriptValidation(
        can_generate=course_count > 0,
        issues=issues,
        warnings=warnings,
        course_count=max(0, course_count),
        transcript_status=transcript_status(course_count),
    )


__all__ = [
    "ELECTIVES",
    "GRADUATION_REQUIREMENTS",
    "COMPLETE_TRANSCRIPT_COURSE_COUNT",
    "GraduationRequirementEvaluator",
    "check_credit_minimum",
    "transcript_status",
    "validate_transcript_generation",
]
