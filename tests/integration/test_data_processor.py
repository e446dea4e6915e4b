"""
Integration Tests for CSV Loading

Tests for:
- Loading every export file into validated records
- Defaults for blank optional cells
- Row-level and cross-reference validation
- Optional achievements and activities
- Missing files and unknown students
"""

import pytest

from transcript_tracker.core.exceptions import DataLoadError, StudentNotFoundError
from transcript_tracker.data_processor import TranscriptDataProcessor


@pytest.fixture
def processor(data_dir):
    processor = TranscriptDataProcessor(data_dir)
    assert processor.load_all_data()
    return processor


class TestLoadAllData:
    """Tests for TranscriptDataProcessor.load_all_data"""

    def test_loads_every_source(self, processor):
        assert processor.loaded
        assert len(processor.students) == 2
        assert len(processor.courses) == 4
        assert len(processor.grades) == 3
        assert len(processor.test_scores) == 3
        assert len(processor.achievements) == 2
        assert len(processor.activities) == 3
        assert processor.validation_errors == []
        assert processor.validation_warnings == []

    def test_blank_cells_use_defaults(self, processor):
        alan = processor.students["stu-2"]
        latin = next(c for c in processor.courses if c.id == "c-4")

        assert alan.email is None
        assert alan.date_of_birth is None
        assert alan.min_credits_for_graduation == 24.0
        assert latin.level == "Regular"
        assert latin.credit_hours == 1.0

    def test_grade_column_normalized(self, processor):
        english = next(g for g in processor.grades if g.id == "g-3")

        assert english.letter_grade == "B"
        assert english.semester == "Full Year"
        assert english.gpa_points == 3.0

    def test_achievements_and_activities_parsed(self, processor):
        python = next(a for a in processor.achievements if a.id == "a-1")
        robotics = next(a for a in processor.activities if a.id == "act-1")
        soccer = next(a for a in processor.activities if a.id == "act-2")

        assert python.metadata == {"duration": "8 weeks", "skills": ["Python"]}
        assert robotics.role == "Captain"
        assert robotics.metadata == {"hours": 120}
        assert soccer.is_ongoing
        assert soccer.organization is None

    @pytest.mark.parametrize("filename", ["achievements.csv", "activities.csv"])
    def test_achievements_and_activities_optional(self, data_dir, filename):
        (data_dir / filename).unlink()
        processor = TranscriptDataProcessor(data_dir)

        assert processor.load_all_data()
        assert processor.validation_errors == []

    def test_activity_ending_before_start_skipped(self, data_dir, append_row):
        append_row("activities.csv", "act-4,stu-1,Band,Arts/Performance,,2024-05-01,2024-01-01,,")
        processor = TranscriptDataProcessor(data_dir)

        assert processor.load_all_data()
        assert len(processor.activities) == 3
        assert processor.validation_errors == ["activities.csv row 5: invalid end_date"]

    def test_test_scores_optional(self, data_dir):
        (data_dir / "test_scores.csv").unlink()
        processor = TranscriptDataProcessor(data_dir)

        assert processor.load_all_data()
        assert processor.test_scores == []

    def test_missing_required_file(self, data_dir):
        (data_dir / "grades.csv").unlink()
        processor = TranscriptDataProcessor(data_dir)

        assert processor.load_all_data() is False
        assert not processor.loaded
        assert any("grades.csv" in error for error in processor.validation_errors)

        with pytest.raises(DataLoadError) as exc_info:
            processor.load_or_raise()
        assert exc_info.value.code == "DATA_LOAD_ERROR"
        assert exc_info.value.errors

    def test_missing_required_column(self, data_dir):
        text = (data_dir / "students.csv").read_text(encoding="utf-8")
        (data_dir / "students.csv").write_text(
            text.replace("graduation_year", "grad_year", 1), encoding="utf-8"
        )
        processor = TranscriptDataProcessor(data_dir)

        assert processor.load_all_data() is False
        assert "students.csv missing columns: ['graduation_year']" in processor.validation_errors

    def test_invalid_row_skipped(self, data_dir, append_row):
        append_row("courses.csv", "c-5,stu-1,Geometry,Mathematics,Regular,1.0,2024")
        processor = TranscriptDataProcessor(data_dir)

        assert processor.load_all_data()
        assert len(processor.courses) == 4
        assert processor.validation_errors == ["courses.csv row 6: invalid academic_year"]

    def test_orphaned_records_warned(self, data_dir, append_row):
        append_row("grades.csv", "g-4,c-99,Full Year,A,4.0,")
        append_row("courses.csv", "c-6,stu-9,Physics,Science,Regular,1.0,2024-2025")
        append_row("achievements.csv", "a-3,stu-9,Badge,Scouts,Badge,2024-01-01,")
        processor = TranscriptDataProcessor(data_dir)

        assert processor.load_all_data()
        assert processor.validation_warnings == [
            "Courses with no matching student: 1",
            "Grades with no matching course: 1",
            "Achievements with no matching student: 1",
        ]

    def test_validation_report(self, processor):
        report = processor.generate_validation_report()

        assert "✅ All validation checks passed!" in report
        assert "Students: 2" in report
        assert "Test Scores: 3" in report
        assert "Achievements: 2" in report
        assert "Activities: 3" in report


class TestStudentRecords:
    """Tests for per-student record assembly"""

    def test_record_for_student(self, processor):
        record = processor.get_student_record("stu-1")

        assert record.student.full_name == "Ada Lovelace"
        assert record.student.gpa_scale == "5.0"
        assert record.course_count == 3
        assert {g.id for g in record.grades} == {"g-1", "g-2", "g-3"}
        assert [t.id for t in record.test_scores] == ["t-1", "t-2", "t-3"]
        assert [a.id for a in record.achievements] == ["a-1", "a-2"]
        assert [a.id for a in record.activities] == ["act-1", "act-2"]

    def test_full_year_grade_is_current(self, processor):
        pairs = {pair.course.id: pair for pair in processor.get_student_record("stu-1").course_grade_pairs()}

        assert pairs["c-1"].grade.id == "g-2"
        assert pairs["c-2"].grade.id == "g-3"
        assert pairs["c-3"].grade is None

    def test_unknown_student(self, processor):
        with pytest.raises(StudentNotFoundError) as exc_info:
            processor.get_student_record("stu-404")

        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.message == "Student with id stu-404 not found"

    def test_requires_load(self, data_dir):
        processor = TranscriptDataProcessor(data_dir)

        with pytest.raises(DataLoadError):
            processor.get_all_student_ids()

    def test_all_student_ids(self, processor):
        assert processor.get_all_student_ids() == ["stu-1", "stu-2"]
