"""
DATA PROCESSOR - CSV loading, validation, and student record assembly
Load the family's exported records and hand validated snapshots to the calculators

DATA SOURCES:
✅ students.csv - Identity, GPA scale, credit minimum (required)
✅ courses.csv - Subject, level, credit hours, academic year (required)
✅ grades.csv - Letter grade, stored GPA points, semester (required)
✅ test_scores.csv - Standardized test results with JSON score blobs (optional)
✅ achievements.csv - Certificates, badges and awards earned elsewhere (optional)
✅ activities.csv - Extracurricular activities (optional)

VALIDATION STRATEGY:
1. Schema Validation: required columns must exist
2. Row Validation: every row goes through its pydantic model; bad rows are
   reported and skipped
3. Cross-Reference Validation: courses must belong to a known student,
   grades to a known course, scores, achievements and activities to a
   known student

Dependencies: pandas for CSV loading, pydantic for type-safe validation
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

import pandas as pd
from pydantic import BaseModel, ValidationError

from .core.calculators.gpa import pair_courses_with_grades
from .core.exceptions import DataLoadError, DataValidationError, StudentNotFoundError
from .core.models.records import (
    Course,
    CourseWithGrade,
    ExternalAchievement,
    Grade,
    Student,
    StudentActivity,
    TestScore,
)

logger = logging.getLogger(__name__)

STUDENTS_FILE = "students.csv"
COURSES_FILE = "courses.csv"
GRADES_FILE = "grades.csv"
TEST_SCORES_FILE = "test_scores.csv"
ACHIEVEMENTS_FILE = "achievements.csv"
ACTIVITIES_FILE = "activities.csv"

STUDENT_COLUMNS = ["id", "first_name", "last_name", "graduation_year"]
COURSE_COLUMNS = ["id", "student_id", "name", "subject", "academic_year"]
# Exports from the web app call the letter column "grade"
GRADE_COLUMNS = ["course_id", "grade", "gpa_points"]
TEST_SCORE_COLUMNS = ["id", "student_id", "test_type", "test_date", "scores"]
ACHIEVEMENT_COLUMNS = ["id", "student_id", "title", "provider", "category", "certificate_date"]
ACTIVITY_COLUMNS = ["id", "student_id", "activity_name", "category", "start_date"]


@dataclass
class StudentRecord:
    """Snapshot of one student's records, ready for the calculators"""

    student: Student
    courses: List[Course] = field(default_factory=list)
    grades: List[Grade] = field(default_factory=list)
    test_scores: List[TestScore] = field(default_factory=list)
    achievements: List[ExternalAchievement] = field(default_factory=list)
    activities: List[StudentActivity] = field(default_factory=list)

    @property
    def course_count(self) -> int:
        return len(self.courses)

    def course_grade_pairs(self) -> List[CourseWithGrade]:
        return pair_courses_with_grades(self.courses, self.grades)


def _frame_rows(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    """DataFrame rows as dicts with NaN replaced by None"""
    cleaned = frame.astype(object).where(pd.notna(frame), None)
    return cleaned.to_dict("records")


def _strip_blank(row: Dict[str, Any]) -> Dict[str, Any]:
    # Empty optional cells fall back to model defaults
    return {
        key: value
        for key, value in row.items()
        if value is not None and not (isinstance(value, str) and not value.strip())
    }


def _field_name(model: Type[BaseModel], loc) -> str:
    # Errors report camelCase aliases; CSV headers use field names
    names = {info.alias or name: name for name, info in model.model_fields.items()}
    return ".".join(str(names.get(part, part)) for part in loc)


def _to_record(model: Type[BaseModel], row: Dict[str, Any], source: str, row_number: int):
    try:
        return model(**_strip_blank(row))
    except ValidationError as e:
        fields = ", ".join(_field_name(model, err["loc"]) for err in e.errors())
        raise DataValidationError(f"{source} row {row_number}: invalid {fields}", field=fields) from e


class TranscriptDataProcessor:
    """Load and validate the CSV exports used for transcript generation"""

    def __init__(self, data_dir: Optional[Path] = None):
        if data_dir is None:
            self.data_dir = Path.cwd() / "data"
        else:
            self.data_dir = Path(data_dir)

        self.students: Dict[str, Student] = {}
        self.courses: List[Course] = []
        self.grades: List[Grade] = []
        self.test_scores: List[TestScore] = []
        self.achievements: List[ExternalAchievement] = []
        self.activities: List[StudentActivity] = []

        self.loaded = False
        self.validation_errors: List[str] = []
        self.validation_warnings: List[str] = []

    def load_all_data(self) -> bool:
        """Load all CSV data sources with validation"""

        logger.info("🔍 LOADING TRANSCRIPT DATA SOURCES")
        logger.info("=" * 60)

        self.validation_errors = []
        self.validation_warnings = []

        success = True
        success &= self._load_students()
        success &= self._load_courses()
        success &= self._load_grades()

        # Optional - won't fail if missing
        self._load_test_scores()
        self._load_achievements()
        self._load_activities()

        if success:
            logger.info("✅ All data sources loaded successfully")
            self._perform_cross_validation()
        else:
            logger.error("❌ Data loading failed - check validation errors")

        self.loaded = success
        return success

    def load_or_raise(self) -> None:
        """Load all data, raising DataLoadError when a required source fails"""
        if not self.load_all_data():
            raise DataLoadError(
                f"Failed to load transcript data from {self.data_dir}", self.validation_errors
            )

    def _read_csv(self, filename: str, required_columns: List[str]) -> Optional[pd.DataFrame]:
        file_path = self.data_dir / filename

        try:
            logger.info(f"📊 Loading {filename} from: {file_path}")
            frame = pd.read_csv(file_path, encoding="utf-8-sig", dtype=str)
        except Exception as e:
            self.validation_errors.append(f"Failed to load {filename}: {e}")
            logger.error(f"  ❌ Failed to load {filename}: {e}")
            return None

        frame.columns = [str(col).strip() for col in frame.columns]
        missing = [col for col in required_columns if col not in frame.columns]
        if missing:
            self.validation_errors.append(f"{filename} missing columns: {missing}")
            logger.error(f"  ❌ {filename} missing columns: {missing}")
            return None

        return frame

    def _build_records(self, frame: pd.DataFrame, model: Type[BaseModel], source: str) -> list:
        records = []
        for row_number, row in enumerate(_frame_rows(frame), start=2):
            try:
                records.append(_to_record(model, row, source, row_number))
            except DataValidationError as e:
                self.validation_errors.append(e.message)
                logger.warning(f"  ⚠️ Skipping {e.message}")
        return records

    def _load_students(self) -> bool:
        frame = self._read_csv(STUDENTS_FILE, STUDENT_COLUMNS)
        if frame is None:
            return False

        self.students = {}
        for student in self._build_records(frame, Student, STUDENTS_FILE):
            if student.id in self.students:
                self.validation_warnings.append(f"Duplicate student id {student.id}")
            self.students[student.id] = student

        logger.info(f"  ✅ Loaded {len(self.students)} student records")
        return True

    def _load_courses(self) -> bool:
        frame = self._read_csv(COURSES_FILE, COURSE_COLUMNS)
        if frame is None:
            return False

        self.courses = self._build_records(frame, Course, COURSES_FILE)
        logger.info(f"  ✅ Loaded {len(self.courses)} course records")
        return True

    def _load_grades(self) -> bool:
        frame = self._read_csv(GRADES_FILE, GRADE_COLUMNS)
        if frame is None:
            return False

        frame = frame.rename(columns={"grade": "letter_grade"})
        self.grades = self._build_records(frame, Grade, GRADES_FILE)
        logger.info(f"  ✅ Loaded {len(self.grades)} grade records")
        return True

    def _load_optional(self, filename: str, columns: List[str], model: Type[BaseModel], label: str):
        """Load an optional CSV source; None when the file is absent or unreadable"""

        if not (self.data_dir / filename).exists():
            logger.info(f"  ℹ️  No {label} file found - transcripts will generate without {label}")
            return None

        frame = self._read_csv(filename, columns)
        if frame is None:
            return None

        records = self._build_records(frame, model, filename)
        logger.info(f"  ✅ Loaded {len(records)} records from {filename}")
        return records

    def _load_test_scores(self) -> bool:
        """Load test scores CSV - optional data source"""
        records = self._load_optional(TEST_SCORES_FILE, TEST_SCORE_COLUMNS, TestScore, "test scores")
        self.test_scores = records or []
        return records is not None

    def _load_achievements(self) -> bool:
        """Load external achievements CSV - optional data source"""
        records = self._load_optional(
            ACHIEVEMENTS_FILE, ACHIEVEMENT_COLUMNS, ExternalAchievement, "achievements"
        )
        self.achievements = records or []
        return records is not None

    def _load_activities(self) -> bool:
        """Load student activities CSV - optional data source"""
        records = self._load_optional(ACTIVITIES_FILE, ACTIVITY_COLUMNS, StudentActivity, "activities")
        self.activities = records or []
        return records is not None

    def _perform_cross_validation(self):
        """Perform cross-validation between data sources"""

        logger.info("🔍 Performing cross-validation between data sources")

        orphaned_courses = [c for c in self.courses if c.student_id not in self.students]
        if orphaned_courses:
            self.validation_warnings.append(
                f"Courses with no matching student: {len(orphaned_courses)}"
            )

        course_ids = {c.id for c in self.courses}
        orphaned_grades = [g for g in self.grades if g.course_id not in course_ids]
        if orphaned_grades:
            self.validation_warnings.append(
                f"Grades with no matching course: {len(orphaned_grades)}"
            )

        orphaned_scores = [t for t in self.test_scores if t.student_id not in self.students]
        if orphaned_scores:
            self.validation_warnings.append(
                f"Test scores with no matching student: {len(orphaned_scores)}"
            )

        orphaned_achievements = [a for a in self.achievements if a.student_id not in self.students]
        if orphaned_achievements:
            self.validation_warnings.append(
                f"Achievements with no matching student: {len(orphaned_achievements)}"
            )

        orphaned_activities = [a for a in self.activities if a.student_id not in self.students]
        if orphaned_activities:
            self.validation_warnings.append(
                f"Activities with no matching student: {len(orphaned_activities)}"
            )

    def _require_loaded(self):
        if not self.loaded:
            raise DataLoadError("Data not loaded - call load_all_data() first")

    def get_student_record(self, student_id: str) -> StudentRecord:
        """Assemble the record snapshot for one student"""

        self._require_loaded()

        student = self.students.get(str(student_id))
        if student is None:
            raise StudentNotFoundError(str(student_id))

        courses = [c for c in self.courses if c.student_id == student.id]
        course_ids = {c.id for c in courses}

        return StudentRecord(
            student=student,
            courses=courses,
            grades=[g for g in self.grades if g.course_id in course_ids],
            test_scores=[t for t in self.test_scores if t.student_id == student.id],
            achievements=[a for a in self.achievements if a.student_id == student.id],
            activities=[a for a in self.activities if a.student_id == student.id],
        )

    def get_all_student_ids(self) -> List[str]:
        """Get list of all student ids"""

        self._require_loaded()
        return list(self.students)

    def generate_validation_report(self) -> str:
        """Generate validation report"""

        report = ["🔍 DATA VALIDATION REPORT", "=" * 50, ""]

        if not self.validation_errors and not self.validation_warnings:
            report.append("✅ All validation checks passed!")
        else:
            if self.validation_errors:
                report.append("❌ ERRORS (Must be fixed):")
                for error in self.validation_errors:
                    report.append(f"  • {error}")
                report.append("")

            if self.validation_warnings:
                report.append("⚠️ WARNINGS (Review recommended):")
                for warning in self.validation_warnings:
                    report.append(f"  • {warning}")
                report.append("")

        report.append("📊 DATA SUMMARY:")
        report.append(f"  Students: {len(self.students)}")
        report.append(f"  Courses: {len(self.courses)}")
        report.append(f"  Grade Records: {len(self.grades)}")
        report.append(f"  Test Scores: {len(self.test_scores)}")
        report.append(f"  Achievements: {len(self.achievements)}")
        report.append(f"  Activities: {len(self.activities)}")

        return "\n".join(report)


__all__ = ["StudentRecord", "TranscriptDataProcessor"]
