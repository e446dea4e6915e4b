"""
Closed value sets shared by records, calculators and the CSV loader.
"""

from enum import Enum


class LetterGrade(str, Enum):
    """Letter grades a guardian can record for a course"""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class GpaScale(str, Enum):
    """Per-student GPA scale (4.0 unweighted, 5.0 weighted)"""
    UNWEIGHTED = "4.0"
    WEIGHTED = "5.0"


class CourseLevel(str, Enum):
    REGULAR = "Regular"
    HONORS = "Honors"
    ADVANCED_PLACEMENT = "Advanced Placement"
    DUAL_ENROLLMENT = "Dual Enrollment"
    COLLEGE_PREP = "College Prep"


class Subject(str, Enum):
    ENGLISH = "English"
    MATHEMATICS = "Mathematics"
    SCIENCE = "Science"
    COMPUTER_SCIENCE = "Computer Science"
    SOCIAL_STUDIES = "Social Studies"
    FOREIGN_LANGUAGE = "Foreign Language"
    FINE_ARTS = "Fine Arts"
    PHYSICAL_EDUCATION = "Physical Education"
    CAREER_TECHNICAL = "Career/Technical Education"
    ELECTIVE = "Elective"
    OTHER = "Other"


class TestType(str, Enum):
    SAT = "SAT"
    ACT = "ACT"
    PSAT = "PSAT"
    AP = "AP"
    CLEP = "CLEP"
    SAT_SUBJECT = "SAT Subject"
    STATE_ASSESSMENT = "State Assessment"
    OTHER = "Other"


class AchievementCategory(str, Enum):
    ONLINE_COURSE = "Online Course"
    CERTIFICATION = "Certification"
    BADGE = "Badge"
    AWARD = "Award"
    OTHER = "Other"


class ActivityCategory(str, Enum):
    SPORTS = "Sports"
    SCOUTING = "Scouting/Youth Groups"
    COMMUNITY_SERVICE = "Community Service"
    ACADEMIC_CLUBS = "Academic Clubs"
    ARTS_PERFORMANCE = "Arts/Performance"
    LEADERSHIP = "Leadership"
    OTHER = "Other"


class TranscriptStatus(str, Enum):
    """Course-count bucket used to gate transcript messaging"""
    EMPTY = "empty"
    PARTIAL = "partial"
    COMPLETE = "complete"


class GpaPointsPolicy(str, Enum):
    """Where the aggregator takes per-grade quality points from"""
    STORED = "stored"  # points written on the grade record at entry time
    RECOMPUTE = "recompute"  # re-derived from letter, scale and course level


__all__ = [
    "LetterGrade",
    "GpaScale",
    "CourseLevel",
    "Subject",
    "TestType",
    "AchievementCategory",
    "ActivityCategory",
    "TranscriptStatus",
    "GpaPointsPolicy",
]
