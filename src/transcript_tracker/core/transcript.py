"""
TRANSCRIPT BUILDER - Assemble the transcript data structure for one student

ASSEMBLY:
1. Pair each course with its current grade
2. Aggregate GPAs and credits (GPACalculator)
3. Evaluate graduation requirements (GraduationRequirementEvaluator)
4. Pick the best score per test type; list achievements and activities
   newest first
5. Attach generation readiness and the student's credit-minimum check

The result is handed to the renderer; nothing here formats a document.
"""

import logging
import math
from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .calculators.gpa import GPACalculator, pair_courses_with_grades
from .calculators.graduation import (
    GraduationRequirementEvaluator,
    check_credit_minimum,
    validate_transcript_generation,
)
from .models.calculations import SubjectStat, TranscriptData, TranscriptStats
from .models.records import (
    Course,
    ExternalAchievement,
    Grade,
    Student,
    StudentActivity,
    TestScore,
)

logger = logging.getLogger(__name__)


def best_test_scores(test_scores: Iterable[TestScore]) -> List[TestScore]:
    """
    Highest total per test type, sorted by test type

    Ties keep the most recent sitting.
    """
    best: Dict[str, TestScore] = {}
    for score in test_scores:
        existing = best.get(score.test_type)
        if existing is None or (score.total_score, score.test_date, score.id) > (
            existing.total_score,
            existing.test_date,
            existing.id,
        ):
            best[score.test_type] = score
    return [best[test_type] for test_type in sorted(best)]


def recent_achievements(achievements: Iterable[ExternalAchievement]) -> List[ExternalAchievement]:
    """Newest certificate first"""
    return sorted(achievements, key=lambda a: (a.certificate_date, a.id), reverse=True)


def recent_activities(activities: Iterable[StudentActivity]) -> List[StudentActivity]:
    """Most recently started activity first"""
    return sorted(activities, key=lambda a: (a.start_date, a.id), reverse=True)


class TranscriptBuilder:
    """Build TranscriptData and transcript statistics from a record snapshot"""

    def __init__(
        self,
        gpa_calculator: Optional[GPACalculator] = None,
        requirement_evaluator: Optional[GraduationRequirementEvaluator] = None,
    ):
        self.gpa_calculator = gpa_calculator or GPACalculator()
        self.requirement_evaluator = requirement_evaluator or GraduationRequirementEvaluator()

    def build(
        self,
        student: Student,
        courses: Iterable[Course],
        grades: Iterable[Grade],
        test_scores: Iterable[TestScore] = (),
        achievements: Iterable[ExternalAchievement] = (),
        activities: Iterable[StudentActivity] = (),
        generated_at: Optional[datetime] = None,
    ) -> TranscriptData:
        """
        Build the complete transcript data for a student

        Args:
            student: Student the transcript is for
            courses: All courses of the student
            grades: Grade rows for those courses
            test_scores: Standardized test results
            achievements: External certificates, badges and awards
            activities: Extracurricular activities
            generated_at: Timestamp to stamp on the transcript (defaults to now)

        Returns:
            TranscriptData
        """
        pairs = pair_courses_with_grades(courses, grades)
        aggregate = self.gpa_calculator.aggregate(pairs, student.gpa_scale)
        graduation = self.requirement_evaluator.evaluate(aggregate.subject_credits)

        transcript = TranscriptData(
            student=student,
            courses_by_year=aggregate.courses_by_year,
            gpa_by_year=aggregate.gpa_by_year,
            cumulative_gpa=aggregate.cumulative_gpa,
            total_credits=aggregate.total_credits,
            total_quality_points=aggregate.total_quality_points,
            requirements=graduation.requirements,
            summary=graduation.summary,
            test_scores=best_test_scores(test_scores),
            achievements=recent_achievements(achievements),
            activities=recent_activities(activities),
            validation=validate_transcript_generation(len(pairs)),
            credit_minimum=check_credit_minimum(student, pairs),
            generated_at=generated_at or datetime.now(),
        )

        logger.info(
            f"📄 Built transcript for {student.full_name}: {len(pairs)} courses, "
            f"GPA {transcript.cumulative_gpa:.2f}, status {transcript.validation.transcript_status}"
        )
        return transcript

    def stats(self, courses: Iterable[Course], grades: Iterable[Grade]) -> TranscriptStats:
        """Course load per subject (graded or not) and letter-grade distribution"""
        courses = list(courses)

        subject_courses: Counter = Counter()
        subject_credits: Dict[str, List[float]] = {}
        for course in courses:
            subject_courses[course.subject] += 1
            subject_credits.setdefault(course.subject, []).append(course.credit_hours)

        pairs = pair_courses_with_grades(courses, grades)
        grade_stats = Counter(pair.grade.letter_grade for pair in pairs if pair.is_graded)

        return TranscriptStats(
            subject_stats={
                subject: SubjectStat(
                    courses=subject_courses[subject],
                    credits=math.fsum(subject_credits[subject]),
                )
                for subject in sorted(subject_courses)
            },
            grade_stats={letter: grade_stats[letter] for letter in sorted(grade_stats)},
            total_courses=len(courses),
            total_credits=math.fsum(course.credit_hours for course in courses),
        )


__all__ = ["TranscriptBuilder", "best_test_scores", "recent_achievements", "recent_activities"]
