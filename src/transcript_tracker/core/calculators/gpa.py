"""
GPA CALCULATOR - Credit-weighted GPA and credit aggregation per student

CALCULATION TYPES:
✅ Year GPA: graded courses of one academic year
✅ Cumulative GPA: graded courses of all years combined
✅ Total credits: every course, graded or still in progress
✅ Quality points: sum of points x credit hours, never rounded
✅ Subject credits: earned (graded) credit hours per subject

FORMULA:
GPA = sum(points x credit hours) / sum(credit hours), graded courses only.
Ungraded courses count toward total credits but never toward GPA credits.
GPAs are rounded half-up to 2 decimals; an empty denominator yields 0.

EDGE CASES HANDLED:
- No courses at all: zero/empty results, never an error
- A year with only ungraded courses: left out of the per-year GPAs
- Several grade rows for one course: the "Full Year" row is the current one,
  otherwise the latest term by year and season
- Input order: sums use math.fsum, so shuffled input gives identical output

The calculator holds no per-call state; one instance can serve any number
of students.
"""

import logging
import math
import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..models.calculations import GPACalculation, StudentGPASummary, YearGPA
from ..models.enums import GpaPointsPolicy, GpaScale
from ..models.records import DEFAULT_SEMESTER, Course, CourseWithGrade, Grade, Student
from .grade_points import resolve_for_course, round_half_up

logger = logging.getLogger(__name__)

# Stored points are written with two decimals
STALE_POINTS_TOLERANCE = 0.005

SEMESTER_YEAR_PATTERN = re.compile(r"\d{4}")
TERM_ORDER = {"winter": 0, "spring": 1, "summer": 2, "fall": 3, "autumn": 3}


@dataclass(frozen=True)
class TranscriptAggregate:
    """Aggregate metrics for one student's course/grade snapshot"""

    courses_by_year: Dict[str, List[CourseWithGrade]] = field(default_factory=dict)
    gpa_by_year: Dict[str, YearGPA] = field(default_factory=dict)
    cumulative_gpa: float = 0.0
    total_credits: float = 0.0
    total_quality_points: float = 0.0
    subject_credits: Dict[str, float] = field(default_factory=dict)


def _semester_order(semester: str) -> Tuple[int, int]:
    """(year, term) for labels like "Fall 2023"; (-1, -1) parts when unrecognized"""
    match = SEMESTER_YEAR_PATTERN.search(semester)
    year = int(match.group(0)) if match else -1
    words = semester.lower().split()
    term = next((TERM_ORDER[word] for word in words if word in TERM_ORDER), -1)
    return year, term


def _current_grade_key(grade: Grade) -> Tuple[int, int, int, str, str]:
    """
    Sort key for picking the current grade of a course

    The "Full Year" row wins. Otherwise the latest term wins, ordered by
    calendar year and then Winter < Spring < Summer < Fall, so "Fall 2024"
    beats "Spring 2023". Ties fall back to the label text, then the greatest id.
    """
    year, term = _semester_order(grade.semester)
    return (
        1 if grade.semester == DEFAULT_SEMESTER else 0,
        year,
        term,
        grade.semester,
        grade.id or "",
    )


def pair_courses_with_grades(
    courses: Iterable[Course], grades: Iterable[Grade]
) -> List[CourseWithGrade]:
    """
    Attach the current grade (if any) to every course

    Args:
        courses: Courses of one student
        grades: Grade rows for those courses, any number per course

    Returns:
        One CourseWithGrade per course, in course input order
    """
    courses = list(courses)
    known_ids = {course.id for course in courses}

    current: Dict[str, Grade] = {}
    for grade in grades:
        if grade.course_id not in known_ids:
            logger.warning(f"⚠️ Ignoring grade for unknown course {grade.course_id}")
            continue
        existing = current.get(grade.course_id)
        if existing is None or _current_grade_key(grade) > _current_grade_key(existing):
            current[grade.course_id] = grade

    return [CourseWithGrade(course=course, grade=current.get(course.id)) for course in courses]


def earned_subject_credits(pairs: Iterable[CourseWithGrade]) -> Dict[str, float]:
    """Graded credit hours per course subject; in-progress courses are not earned yet"""
    credits: Dict[str, List[float]] = defaultdict(list)
    for pair in pairs:
        if pair.is_graded:
            credits[pair.course.subject].append(pair.course.credit_hours)
    return {subject: math.fsum(values) for subject, values in sorted(credits.items())}


def _display_key(pair: CourseWithGrade) -> Tuple[str, str]:
    return (pair.course.name, pair.course.id)


def _gpa(quality_points: Sequence[float], credits: Sequence[float]) -> float:
    total_credits = math.fsum(credits)
    if total_credits <= 0:
        return 0.0
    return round_half_up(math.fsum(quality_points) / total_credits)


class GPACalculator:
    """Calculate year and cumulative GPAs plus credit totals from course/grade pairs"""

    def __init__(self, points_policy: Union[str, GpaPointsPolicy] = GpaPointsPolicy.STORED):
        """
        Initialize calculator

        Args:
            points_policy: STORED uses the points written on each grade record
                (historical transcripts never change); RECOMPUTE re-derives them
                from letter grade, student scale and course level
        """
        self.points_policy = GpaPointsPolicy(points_policy)

    def grade_points(
        self, pair: CourseWithGrade, gpa_scale: Union[str, GpaScale] = GpaScale.UNWEIGHTED
    ) -> Optional[float]:
        """Points for one pair under the configured policy; None when ungraded"""
        if pair.grade is None:
            return None
        if self.points_policy == GpaPointsPolicy.RECOMPUTE:
            return resolve_for_course(pair.grade.letter_grade, gpa_scale, pair.course)
        return pair.grade.gpa_points

    def aggregate(
        self,
        pairs: Iterable[CourseWithGrade],
        gpa_scale: Union[str, GpaScale] = GpaScale.UNWEIGHTED,
    ) -> TranscriptAggregate:
        """
        Compute all transcript metrics for one student

        Args:
            pairs: Every course of the student with its current grade or None
            gpa_scale: Student GPA scale (only consulted by the RECOMPUTE policy)

        Returns:
            TranscriptAggregate
        """
        pairs = list(pairs)

        by_year: Dict[str, List[CourseWithGrade]] = defaultdict(list)
        for pair in pairs:
            by_year[pair.course.academic_year].append(pair)

        courses_by_year = {
            year: sorted(by_year[year], key=_display_key) for year in sorted(by_year)
        }

        gpa_by_year: Dict[str, YearGPA] = {}
        all_points: List[float] = []
        all_credits: List[float] = []

        for year, year_pairs in courses_by_year.items():
            year_points: List[float] = []
            year_credits: List[float] = []
            for pair in year_pairs:
                points = self.grade_points(pair, gpa_scale)
                if points is None:
                    continue
                credit_hours = pair.course.credit_hours
                year_points.append(points * credit_hours)
                year_credits.append(credit_hours)

            if not year_credits:
                continue

            gpa_by_year[year] = YearGPA(
                gpa=_gpa(year_points, year_credits),
                credits=math.fsum(year_credits),
            )
            all_points.extend(year_points)
            all_credits.extend(year_credits)

        aggregate = TranscriptAggregate(
            courses_by_year=courses_by_year,
            gpa_by_year=gpa_by_year,
            cumulative_gpa=_gpa(all_points, all_credits),
            total_credits=math.fsum(pair.course.credit_hours for pair in pairs),
            total_quality_points=math.fsum(all_points),
            subject_credits=earned_subject_credits(pairs),
        )

        logger.debug(
            f"📊 Aggregated {len(pairs)} courses: cumulative GPA {aggregate.cumulative_gpa:.2f}, "
            f"{aggregate.total_credits:.2f} credits"
        )
        return aggregate

    def calculate_gpa(
        self,
        pairs: Iterable[CourseWithGrade],
        gpa_scale: Union[str, GpaScale] = GpaScale.UNWEIGHTED,
        academic_year: Optional[str] = None,
    ) -> GPACalculation:
        """
        GPA summary over graded courses, optionally for one academic year

        Unlike the transcript totals, ``total_credits`` here only counts graded
        courses since it is the GPA denominator.
        """
        points: List[float] = []
        credits: List[float] = []
        for pair in pairs:
            if academic_year is not None and pair.course.academic_year != academic_year:
                continue
            grade_points = self.grade_points(pair, gpa_scale)
            if grade_points is None:
                continue
            points.append(grade_points * pair.course.credit_hours)
            credits.append(pair.course.credit_hours)

        return GPACalculation(
            gpa=_gpa(points, credits),
            total_credits=math.fsum(credits),
            total_quality_points=math.fsum(points),
            course_count=len(credits),
            gpa_scale=gpa_scale,
            academic_year=academic_year,
        )

    def summarize_students(
        self, records: Iterable[Tuple[Student, Iterable[CourseWithGrade]]]
    ) -> List[StudentGPASummary]:
        """GPA overview row for every student of a family"""
        summary = []
        for student, pairs in records:
            result = self.calculate_gpa(pairs, student.gpa_scale)
            summary.append(
                StudentGPASummary(
                    student_id=student.id,
                    student_name=student.full_name,
                    gpa=result.gpa,
                    total_credits=result.total_credits,
                    course_count=result.course_count,
                    gpa_scale=student.gpa_scale,
                )
            )
        return summary

    def find_stale_grades(
        self,
        pairs: Iterable[CourseWithGrade],
        gpa_scale: Union[str, GpaScale] = GpaScale.UNWEIGHTED,
    ) -> List[CourseWithGrade]:
        """
        Grades whose stored points no longer match letter, scale and level

        Happens when a student's scale or a course level changes after grading.
        """
        stale = []
        for pair in pairs:
            if pair.grade is None:
                continue
            expected = resolve_for_course(pair.grade.letter_grade, gpa_scale, pair.course)
            if abs(expected - pair.grade.gpa_points) > STALE_POINTS_TOLERANCE:
                logger.warning(
                    f"⚠️ Stale grade points for {pair.course.name} ({pair.course.academic_year}): "
                    f"stored {pair.grade.gpa_points:.2f}, expected {expected:.2f}"
                )
                stale.append(pair)
        return stale


__all__ = [
    "TranscriptAggregate",
    "GPACalculator",
    "pair_courses_with_grades",
    "earned_subject_credits",
]
