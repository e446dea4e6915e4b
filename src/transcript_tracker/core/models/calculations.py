"""
CALCULATION RESULTS - Pydantic schemas for computed transcript data

Every result serializes to the camelCase shape the dashboard and the
transcript renderer consume (``to_dict()``), while Python callers use
snake_case attributes.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import GpaScale, TranscriptStatus
from .records import CourseWithGrade, ExternalAchievement, Student, StudentActivity, TestScore


class ResultModel(BaseModel):
    """Base for computed results"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class YearGPA(ResultModel):
    """GPA and graded credits for one academic year"""

    gpa: float = Field(..., ge=0.0, le=5.0, description="Year GPA, rounded to 2 decimals")
    credits: float = Field(..., ge=0.0, description="Credit hours of graded courses in the year")


class GPACalculation(ResultModel):
    """GPA summary for one student, optionally limited to one academic year"""

    gpa: float = Field(..., ge=0.0, le=5.0, description="Credit-weighted GPA, rounded to 2 decimals")
    total_credits: float = Field(..., ge=0.0, description="Credit hours of graded courses")
    total_quality_points: float = Field(..., ge=0.0, description="Sum of points x credit hours")
    course_count: int = Field(..., ge=0, description="Number of graded courses")
    gpa_scale: GpaScale = Field(..., description="Student GPA scale")
    academic_year: Optional[str] = Field(None, description="Academic year filter, if any")


class StudentGPASummary(ResultModel):
    """Row of the family-wide GPA overview"""

    student_id: str
    student_name: str
    gpa: float = Field(..., ge=0.0, le=5.0)
    total_credits: float = Field(..., ge=0.0)
    course_count: int = Field(..., ge=0)
    gpa_scale: GpaScale


class RequirementProgress(ResultModel):
    required: float = Field(..., ge=0.0)
    earned: float = Field(0.0, ge=0.0)


class RequirementsSummary(ResultModel):
    total_required: float = Field(..., ge=0.0)
    total_earned: float = Field(..., ge=0.0)
    meets_requirements: bool
    credits_remaining: float = Field(..., ge=0.0)
    progress: float = Field(..., ge=0.0, le=100.0, description="Percent of required credits earned")


class GraduationRequirements(ResultModel):
    """Subject-distribution graduation check"""

    requirements: Dict[str, RequirementProgress]
    summary: RequirementsSummary


class CreditMinimumCheck(ResultModel):
    """Comparison against the student's own overall credit minimum"""

    min_credits_for_graduation: float = Field(..., ge=0.0)
    earned_credits: float = Field(..., ge=0.0)
    meets_minimum: bool
    credits_remaining: float = Field(..., ge=0.0)


class TranscriptValidation(ResultModel):
    """Whether a transcript can be generated and what to tell the family"""

    can_generate: bool
    issues: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    course_count: int = Field(..., ge=0)
    transcript_status: TranscriptStatus


class SubjectStat(ResultModel):
    courses: int = Field(0, ge=0)
    credits: float = Field(0.0, ge=0.0)


class TranscriptStats(ResultModel):
    """Course load by subject and letter-grade distribution"""

    subject_stats: Dict[str, SubjectStat] = Field(default_factory=dict)
    grade_stats: Dict[str, int] = Field(default_factory=dict)
    total_courses: int = Field(0, ge=0)
    total_credits: float = Field(0.0, ge=0.0)


class TranscriptData(ResultModel):
    """Everything the renderer needs for one student's transcript"""

    student: Student
    courses_by_year: Dict[str, List[CourseWithGrade]] = Field(default_factory=dict)
    gpa_by_year: Dict[str, YearGPA] = Field(default_factory=dict)
    cumulative_gpa: float = Field(0.0, ge=0.0, le=5.0, alias="cumulativeGPA")
    total_credits: float = Field(0.0, ge=0.0)
    total_quality_points: float = Field(0.0, ge=0.0)
    requirements: Dict[str, RequirementProgress] = Field(default_factory=dict)
    summary: RequirementsSummary
    test_scores: List[TestScore] = Field(default_factory=list)
    achievements: List[ExternalAchievement] = Field(default_factory=list)
    activities: List[StudentActivity] = Field(default_factory=list)
    validation: TranscriptValidation
    credit_minimum: CreditMinimumCheck
    generated_at: datetime = Field(default_factory=datetime.now)


__all__ = [
    "YearGPA",
    "GPACalculation",
    "StudentGPASummary",
    "RequirementProgress",
    "RequirementsSummary",
    "GraduationRequirements",
    "CreditMinimumCheck",
    "TranscriptValidation",
    "SubjectStat",
    "TranscriptStats",
    "TranscriptData",
]
