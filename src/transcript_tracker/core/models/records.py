"""
RECORD MODELS - Pydantic schemas for the academic records a family enters
Type-safe structures for students, courses, grades, test scores,
achievements and activities

VALIDATION RULES:
- Academic years must look like "YYYY-YYYY"
- Credit hours must be positive
- Stored GPA points must be 0.0-5.0
- GPA scale must be "4.0" or "5.0"
- Test score and metadata blobs accept JSON text or a mapping
- Activity end dates must not precede start dates

These are snapshots handed over by the persistence layer; nothing here
talks to a database.
"""

import json
import re
from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import (
    AchievementCategory,
    ActivityCategory,
    CourseLevel,
    GpaScale,
    LetterGrade,
    Subject,
    TestType,
)

ACADEMIC_YEAR_PATTERN = re.compile(r"^\d{4}-\d{4}$")
DEFAULT_SEMESTER = "Full Year"

HONORS_OR_AP_LEVELS = {CourseLevel.HONORS.value, CourseLevel.ADVANCED_PLACEMENT.value}


def _coerce_id(v):
    """CSV exports hand ids over as ints; keep every id a string"""
    if v is None:
        return v
    return str(v)


def _parse_json_blob(v):
    """JSON columns arrive as text from CSV exports and as mappings from callers"""
    if v is None:
        return {}
    if isinstance(v, str):
        return json.loads(v) if v.strip() else {}
    return v


class RecordModel(BaseModel):
    """Base for entered records; serialized camelCase, built from snake_case"""

    model_config = ConfigDict(
        use_enum_values=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Student(RecordModel):
    """Student identity and GPA configuration"""

    id: str = Field(..., description="Student identifier")
    first_name: str = Field(..., description="Student first name")
    last_name: str = Field(..., description="Student last name")
    graduation_year: int = Field(..., ge=1900, le=2100, description="Expected graduation year")
    email: Optional[str] = Field(None, description="Optional student email")
    date_of_birth: Optional[date] = Field(None, description="Date of birth")

    gpa_scale: GpaScale = Field(GpaScale.UNWEIGHTED, description="GPA scale chosen for this student")
    min_credits_for_graduation: float = Field(
        24.0, ge=0.0, description="Family-set overall credit minimum"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return _coerce_id(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if v and "@" not in v:
            raise ValueError("Invalid email format")
        return v or None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Course(RecordModel):
    """A course taken by one student in one academic year"""

    id: str = Field(..., description="Course identifier")
    student_id: Optional[str] = Field(None, description="Owning student")
    name: str = Field(..., description="Course title shown on the transcript")
    subject: Subject = Field(..., description="Subject area")
    level: CourseLevel = Field(CourseLevel.REGULAR, description="Course level")
    credit_hours: float = Field(1.0, gt=0.0, description="Credit hours")
    academic_year: str = Field(..., description="Academic year, e.g. '2023-2024'")

    description: Optional[str] = Field(None, description="Course description")
    provider: Optional[str] = Field(None, description="Curriculum provider")

    @field_validator("id", "student_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return _coerce_id(v)

    @field_validator("academic_year")
    @classmethod
    def validate_academic_year(cls, v):
        v = v.strip()
        if not ACADEMIC_YEAR_PATTERN.match(v):
            raise ValueError(f'Academic year must be in format "YYYY-YYYY", got: {v}')
        return v

    @property
    def is_honors_or_ap(self) -> bool:
        """Honors and AP earn the weighted bonus; Dual Enrollment and College Prep do not"""
        return self.level in HONORS_OR_AP_LEVELS


class Grade(RecordModel):
    """Grade record for a course and semester key"""

    id: Optional[str] = Field(None, description="Grade identifier")
    course_id: str = Field(..., description="Course this grade belongs to")
    letter_grade: LetterGrade = Field(..., description="Letter grade")
    gpa_points: float = Field(..., ge=0.0, le=5.0, description="Quality points stored at entry time")
    semester: str = Field(DEFAULT_SEMESTER, description="Semester label, e.g. 'Fall 2023' or 'Full Year'")
    percentage: Optional[float] = Field(None, ge=0.0, le=100.0, description="Optional percentage")

    @field_validator("id", "course_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return _coerce_id(v)

    @field_validator("letter_grade", mode="before")
    @classmethod
    def normalize_letter(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("semester", mode="before")
    @classmethod
    def default_semester(cls, v):
        if v is None or not str(v).strip():
            return DEFAULT_SEMESTER
        return str(v).strip()


class TestScoreData(RecordModel):
    """Score blob for a standardized test; extra keys hold subscores"""

    __test__ = False

    model_config = ConfigDict(extra="allow")

    total: Optional[float] = None
    max_score: Optional[float] = None
    percentile: Optional[float] = None


class TestScore(RecordModel):
    """Standardized test result; reported on the transcript, never part of GPA"""

    __test__ = False

    id: str = Field(..., description="Test score identifier")
    student_id: str = Field(..., description="Owning student")
    test_type: TestType = Field(..., description="Test type")
    test_date: date = Field(..., description="Date the test was taken")
    scores: TestScoreData = Field(default_factory=TestScoreData, description="Score breakdown")
    test_center: Optional[str] = Field(None, description="Test center")
    notes: Optional[str] = Field(None, description="Notes")

    @field_validator("id", "student_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return _coerce_id(v)

    @field_validator("scores", mode="before")
    @classmethod
    def parse_scores(cls, v):
        return _parse_json_blob(v)

    @property
    def total_score(self) -> float:
        return self.scores.total or 0.0


class ExternalAchievement(RecordModel):
    """Certificate, badge or award earned outside the course load"""

    id: str = Field(..., description="Achievement identifier")
    student_id: str = Field(..., description="Owning student")
    title: str = Field(..., description="Achievement title")
    provider: str = Field(..., description="Issuer, e.g. 'Coursera'")
    category: AchievementCategory = Field(..., description="Achievement category")
    certificate_date: date = Field(..., description="Date the certificate was issued")
    certificate_url: Optional[str] = Field(None, description="Certificate link")
    verification_url: Optional[str] = Field(None, description="Verification link")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Score, duration, skills, ...")
    description: Optional[str] = Field(None, description="Description")
    notes: Optional[str] = Field(None, description="Notes")

    @field_validator("id", "student_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return _coerce_id(v)

    @field_validator("metadata", mode="before")
    @classmethod
    def parse_metadata(cls, v):
        return _parse_json_blob(v)


class StudentActivity(RecordModel):
    """Extracurricular activity; an open end date means it is ongoing"""

    id: str = Field(..., description="Activity identifier")
    student_id: str = Field(..., description="Owning student")
    activity_name: str = Field(..., description="Activity name")
    category: ActivityCategory = Field(..., description="Activity category")
    organization: Optional[str] = Field(None, description="Club, team or troop")
    start_date: date = Field(..., description="First day of participation")
    end_date: Optional[date] = Field(None, description="Last day, None while ongoing")
    role: Optional[str] = Field(None, description="Role, e.g. 'Team Captain'")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Awards, hours, ...")
    description: Optional[str] = Field(None, description="Description")
    notes: Optional[str] = Field(None, description="Notes")

    @field_validator("id", "student_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return _coerce_id(v)

    @field_validator("metadata", mode="before")
    @classmethod
    def parse_metadata(cls, v):
        return _parse_json_blob(v)

    @field_validator("end_date")
    @classmethod
    def end_after_start(cls, v, info):
        start = info.data.get("start_date")
        if v is not None and start is not None and v < start:
            raise ValueError("End date must not be before start date")
        return v

    @property
    def is_ongoing(self) -> bool:
        return self.end_date is None


class CourseWithGrade(RecordModel):
    """One aggregator input row: a course and its current grade, if any"""

    course: Course
    grade: Optional[Grade] = None

    @property
    def is_graded(self) -> bool:
        return self.grade is not None


__all__ = [
    "Student",
    "Course",
    "Grade",
    "TestScoreData",
    "TestScore",
    "ExternalAchievement",
    "StudentActivity",
    "CourseWithGrade",
    "DEFAULT_SEMESTER",
]
