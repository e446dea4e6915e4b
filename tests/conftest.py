"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Record factories (students, courses, grades)
- A sample four-year course load
- A CSV export directory for loader tests
"""

import json
from datetime import date

import pandas as pd
import pytest

from transcript_tracker.core.models import Course, CourseWithGrade, Grade, Student


@pytest.fixture
def make_student():
    """Factory for Student records"""

    def _make(**overrides):
        data = {
            "id": "stu-1",
            "first_name": "Test",
            "last_name": "Student",
            "graduation_year": 2026,
            "gpa_scale": "4.0",
        }
        data.update(overrides)
        return Student(**data)

    return _make


@pytest.fixture
def make_course():
    """Factory for Course records; ids are generated from the name"""

    def _make(name="Algebra 1", subject="Mathematics", credit_hours=1.0,
              academic_year="2023-2024", level="Regular", **overrides):
        data = {
            "id": overrides.pop("id", name.lower().replace(" ", "-")),
            "student_id": "stu-1",
            "name": name,
            "subject": subject,
            "level": level,
            "credit_hours": credit_hours,
            "academic_year": academic_year,
        }
        data.update(overrides)
        return Course(**data)

    return _make


@pytest.fixture
def make_pair(make_course):
    """Factory for CourseWithGrade rows; letter=None leaves the course ungraded"""

    def _make(letter=None, gpa_points=None, **course_kwargs):
        course = make_course(**course_kwargs)
        grade = None
        if letter is not None:
            grade = Grade(
                id=f"grade-{course.id}",
                course_id=course.id,
                letter_grade=letter,
                gpa_points=gpa_points,
            )
        return CourseWithGrade(course=course, grade=grade)

    return _make


@pytest.fixture
def student(make_student):
    return make_student()


@pytest.fixture
def sample_pairs(make_pair):
    """Two academic years, one ungraded course"""
    return [
        make_pair("A", 4.0, name="English 9", subject="English", academic_year="2022-2023"),
        make_pair("B", 3.0, name="Algebra 1", subject="Mathematics", academic_year="2022-2023"),
        make_pair("A", 4.0, name="Biology", subject="Science", credit_hours=1.0,
                  academic_year="2023-2024"),
        make_pair("C", 2.0, name="Art", subject="Fine Arts", credit_hours=0.5,
                  academic_year="2023-2024"),
        make_pair(None, name="Spanish 1", subject="Foreign Language",
                  academic_year="2023-2024"),
    ]


@pytest.fixture
def data_dir(tmp_path):
    """CSV export directory with two students, including the optional sources"""
    pd.DataFrame(
        [
            {"id": "stu-1", "first_name": "Ada", "last_name": "Lovelace",
             "graduation_year": 2026, "gpa_scale": "5.0", "min_credits_for_graduation": "24.0",
             "email": "ada@example.com", "date_of_birth": "2008-12-10"},
            {"id": "stu-2", "first_name": "Alan", "last_name": "Turing",
             "graduation_year": 2027, "gpa_scale": "4.0", "min_credits_for_graduation": "",
             "email": "", "date_of_birth": ""},
        ]
    ).to_csv(tmp_path / "students.csv", index=False)

    pd.DataFrame(
        [
            {"id": "c-1", "student_id": "stu-1", "name": "AP Calculus", "subject": "Mathematics",
             "level": "Advanced Placement", "credit_hours": "1.0", "academic_year": "2023-2024"},
            {"id": "c-2", "student_id": "stu-1", "name": "English 10", "subject": "English",
             "level": "Regular", "credit_hours": "1.0", "academic_year": "2023-2024"},
            {"id": "c-3", "student_id": "stu-1", "name": "Chemistry", "subject": "Science",
             "level": "Honors", "credit_hours": "1.0", "academic_year": "2024-2025"},
            {"id": "c-4", "student_id": "stu-2", "name": "Latin 1", "subject": "Foreign Language",
             "level": "", "credit_hours": "", "academic_year": "2024-2025"},
        ]
    ).to_csv(tmp_path / "courses.csv", index=False)

    pd.DataFrame(
        [
            {"id": "g-1", "course_id": "c-1", "semester": "Fall 2023", "grade": "B",
             "gpa_points": "4.0", "percentage": "85"},
            {"id": "g-2", "course_id": "c-1", "semester": "Full Year", "grade": "A",
             "gpa_points": "5.0", "percentage": ""},
            {"id": "g-3", "course_id": "c-2", "semester": "", "grade": "b",
             "gpa_points": "3.0", "percentage": ""},
        ]
    ).to_csv(tmp_path / "grades.csv", index=False)

    pd.DataFrame(
        [
            {"id": "t-1", "student_id": "stu-1", "test_type": "SAT", "test_date": "2024-03-09",
             "scores": json.dumps({"total": 1350, "maxScore": 1600, "math": 700})},
            {"id": "t-2", "student_id": "stu-1", "test_type": "SAT", "test_date": "2024-10-05",
             "scores": json.dumps({"total": 1420, "maxScore": 1600})},
            {"id": "t-3", "student_id": "stu-1", "test_type": "ACT", "test_date": "2024-06-08",
             "scores": json.dumps({"total": 31, "maxScore": 36, "percentile": 96})},
        ]
    ).to_csv(tmp_path / "test_scores.csv", index=False)

    pd.DataFrame(
        [
            {"id": "a-1", "student_id": "stu-1", "title": "Python for Everybody", "provider": "Coursera",
             "category": "Online Course", "certificate_date": "2023-05-01",
             "metadata": json.dumps({"duration": "8 weeks", "skills": ["Python"]})},
            {"id": "a-2", "student_id": "stu-1", "title": "First Aid", "provider": "Red Cross",
             "category": "Certification", "certificate_date": "2024-02-10", "metadata": ""},
        ]
    ).to_csv(tmp_path / "achievements.csv", index=False)

    pd.DataFrame(
        [
            {"id": "act-1", "student_id": "stu-1", "activity_name": "Robotics Club",
             "category": "Academic Clubs", "organization": "FIRST", "start_date": "2022-09-01",
             "end_date": "2023-06-01", "role": "Captain", "metadata": json.dumps({"hours": 120})},
            {"id": "act-2", "student_id": "stu-1", "activity_name": "Soccer", "category": "Sports",
             "organization": "", "start_date": "2023-09-01", "end_date": "", "role": "",
             "metadata": ""},
            {"id": "act-3", "student_id": "stu-2", "activity_name": "Chess", "category": "Academic Clubs",
             "organization": "", "start_date": "2024-01-15", "end_date": "", "role": "",
             "metadata": ""},
        ]
    ).to_csv(tmp_path / "activities.csv", index=False)

    return tmp_path


@pytest.fixture
def sample_test_scores():
    from transcript_tracker.core.models import TestScore

    return [
        TestScore(id="t-1", student_id="stu-1", test_type="SAT", test_date=date(2024, 3, 9),
                  scores={"total": 1350, "maxScore": 1600}),
        TestScore(id="t-2", student_id="stu-1", test_type="SAT", test_date=date(2024, 10, 5),
                  scores={"total": 1420, "maxScore": 1600}),
        TestScore(id="t-3", student_id="stu-1", test_type="ACT", test_date=date(2024, 6, 8),
                  scores='{"total": 31, "maxScore": 36}'),
    ]


@pytest.fixture
def append_row(data_dir):
    """Append a raw CSV line to one of the export files"""

    def _append(filename, line):
        with open(data_dir / filename, "a", encoding="utf-8") as f:
            f.write(line.rstrip("\n") + "\n")

    return _append
