from .enums import (
    AchievementCategory,
    ActivityCategory,
    CourseLevel,
    GpaPointsPolicy,
    GpaScale,
    LetterGrade,
    Subject,
    TestType,
    TranscriptStatus,
)
from .records import (
    DEFAULT_SEMESTER,
    Course,
    CourseWithGrade,
    ExternalAchievement,
    Grade,
    Student,
    StudentActivity,
    TestScore,
    TestScoreData,
)
from .calculations import (
    CreditMinimumCheck,
    GPACalculation,
    GraduationRequirements,
    RequirementProgress,
    RequirementsSummary,
    StudentGPASummary,
    SubjectStat,
    TranscriptData,
    TranscriptStats,
    TranscriptValidation,
    YearGPA,
)

__all__ = [
    "AchievementCategory",
    "ActivityCategory",
    "CourseLevel",
    "GpaPointsPolicy",
    "GpaScale",
    "LetterGrade",
    "Subject",
    "TestType",
    "TranscriptStatus",
    "DEFAULT_SEMESTER",
    "Course",
    "CourseWithGrade",
    "ExternalAchievement",
    "Grade",
    "Student",
    "StudentActivity",
    "TestScore",
    "TestScoreData",
    "CreditMinimumCheck",
    "GPACalculation",
    "GraduationRequirements",
    "RequirementProgress",
    "RequirementsSummary",
    "StudentGPASummary",
    "SubjectStat",
    "TranscriptData",
    "TranscriptStats",
    "TranscriptValidation",
    "YearGPA",
]
