"""
Integration Tests for Transcript Rendering

Tests for:
- Building transcript data from the CSV exports
- HTML rendering of courses, GPAs, test scores, achievements and activities
- Refusing to generate a transcript with no courses
- Output file naming
"""

from datetime import date

import pytest

from transcript_tracker.config import Settings
from transcript_tracker.core.exceptions import TranscriptTrackerError
from transcript_tracker.core.models import Student
from transcript_tracker.transcript_generator import (
    TranscriptGenerator,
    format_credits,
    pdf_filename,
)


@pytest.fixture
def generator(data_dir, tmp_path):
    settings = Settings(data_dir=data_dir, output_dir=tmp_path / "out", school_name="Lovelace Home School")
    return TranscriptGenerator(settings)


class TestBuildTranscript:
    def test_loads_on_demand(self, generator):
        transcript = generator.build_transcript("stu-1")

        assert generator.data_processor.loaded
        # (5.0 + 3.0) / 2 graded credits
        assert transcript.cumulative_gpa == 4.0
        assert transcript.total_credits == 3.0
        assert transcript.validation.transcript_status == "partial"
        assert [score.id for score in transcript.test_scores] == ["t-3", "t-2"]
        assert [a.id for a in transcript.achievements] == ["a-2", "a-1"]
        assert [a.id for a in transcript.activities] == ["act-2", "act-1"]

    def test_recompute_policy(self, data_dir, tmp_path):
        settings = Settings(data_dir=data_dir, output_dir=tmp_path, gpa_points_policy="recompute")

        transcript = TranscriptGenerator(settings).build_transcript("stu-1")

        assert transcript.cumulative_gpa == 4.0

    def test_refuses_student_without_courses(self, generator, append_row):
        append_row("students.csv", "stu-3,Emmy,Noether,2028,4.0,,,")

        with pytest.raises(TranscriptTrackerError) as exc_info:
            generator.generate_transcript("stu-3")

        assert exc_info.value.code == "CANNOT_GENERATE"
        assert "No courses found for this student" in exc_info.value.message


class TestRenderHtml:
    def test_render(self, generator):
        html = generator.render_html(generator.build_transcript("stu-1"))

        assert "Lovelace Home School" in html
        assert "Ada Lovelace" in html
        assert "Class of 2026" in html
        assert "AP Calculus" in html
        assert "IP" in html
        assert "2024-2025" in html
        assert "4.00" in html
        assert "1420 / 1600" in html
        assert "1350" not in html

    def test_render_achievements_and_activities(self, generator):
        html = generator.render_html(generator.build_transcript("stu-1"))

        assert "External Achievements" in html
        assert "Python for Everybody" in html
        assert "Coursera" in html
        assert "Robotics Club" in html
        assert "2022-09-01 - 2023-06-01" in html
        assert "2023-09-01 - Present" in html

    def test_sections_omitted_when_empty(self, generator):
        html = generator.render_html(generator.build_transcript("stu-2"))

        assert "External Achievements" not in html
        assert "Chess" in html


class TestFormatting:
    @pytest.mark.parametrize(
        "value,expected", [(1.0, "1.0"), (0.5, "0.5"), (0.25, "0.25"), (3.0, "3.0"), (24.0, "24.0")]
    )
    def test_format_credits(self, value, expected):
        assert format_credits(value) == expected

    def test_pdf_filename(self, generator):
        transcript = generator.build_transcript("stu-1")

        assert pdf_filename(transcript) == "stu-1_Ada_Lovelace_transcript.pdf"

    def test_pdf_filename_strips_punctuation(self):
        from transcript_tracker.core.transcript import TranscriptBuilder

        student = Student(id="9", first_name="Mary-Kate", last_name="O'Neil", graduation_year=2026,
                          date_of_birth=date(2008, 1, 1))
        transcript = TranscriptBuilder().build(student, [], [])

        assert pdf_filename(transcript) == "9_Mary_Kate_O_Neil_transcript.pdf"
