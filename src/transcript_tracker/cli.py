#!/usr/bin/env python3
"""
Command line entry point

Usage:
    transcript-tracker gpa <student_id> [--year 2023-2024]
    transcript-tracker requirements <student_id>
    transcript-tracker validate <student_id>
    transcript-tracker summary
    transcript-tracker generate <student_id> [--output PATH]
    transcript-tracker batch [--output-dir DIR]

Paths default to TRANSCRIPT_TRACKER_* settings; --data-dir overrides.
"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from .config import Settings, get_settings
from .core.calculators.gpa import GPACalculator
from .core.calculators.graduation import (
    GraduationRequirementEvaluator,
    validate_transcript_generation,
)
from .core.exceptions import TranscriptTrackerError
from .data_processor import TranscriptDataProcessor
from .transcript_generator import TranscriptGenerator

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    student_id: str
    student_name: str
    success: bool
    pdf_path: Optional[str]
    error: Optional[str]


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2))


def _load(settings: Settings) -> TranscriptDataProcessor:
    processor = TranscriptDataProcessor(settings.data_dir)
    processor.load_or_raise()
    for warning in processor.validation_warnings:
        logger.warning(f"⚠️ {warning}")
    return processor


def cmd_gpa(args, settings: Settings) -> int:
    record = _load(settings).get_student_record(args.student_id)
    calculator = GPACalculator(settings.gpa_points_policy)
    pairs = record.course_grade_pairs()

    result = calculator.calculate_gpa(pairs, record.student.gpa_scale, academic_year=args.year)
    calculator.find_stale_grades(pairs, record.student.gpa_scale)
    _print_json(result.to_dict())
    return 0


def cmd_requirements(args, settings: Settings) -> int:
    record = _load(settings).get_student_record(args.student_id)
    result = GraduationRequirementEvaluator().evaluate_courses(record.course_grade_pairs())
    _print_json(result.to_dict())
    return 0


def cmd_validate(args, settings: Settings) -> int:
    record = _load(settings).get_student_record(args.student_id)
    result = validate_transcript_generation(record.course_count)
    _print_json(result.to_dict())
    return 0 if result.can_generate else 1


def cmd_summary(args, settings: Settings) -> int:
    processor = _load(settings)
    records = [processor.get_student_record(sid) for sid in processor.get_all_student_ids()]
    summary = GPACalculator(settings.gpa_points_policy).summarize_students(
        (record.student, record.course_grade_pairs()) for record in records
    )
    _print_json([row.to_dict() for row in summary])
    return 0


def cmd_generate(args, settings: Settings) -> int:
    generator = TranscriptGenerator(settings, data_processor=_load(settings))
    output_path = generator.generate_transcript(args.student_id, args.output)
    print(f"✅ Transcript saved to: {output_path}")
    return 0


def cmd_batch(args, settings: Settings) -> int:
    # Reduce logging verbosity during batch
    logging.getLogger("weasyprint").setLevel(logging.ERROR)
    logging.getLogger("transcript_tracker").setLevel(logging.WARNING)

    generator = TranscriptGenerator(settings, data_processor=_load(settings))
    results: List[GenerationResult] = []

    for student_id in tqdm(generator.data_processor.get_all_student_ids(), desc="Transcripts"):
        student = generator.data_processor.students[student_id]
        try:
            path = generator.generate_transcript(student_id)
            results.append(GenerationResult(student_id, student.full_name, True, str(path), None))
        except TranscriptTrackerError as e:
            results.append(GenerationResult(student_id, student.full_name, False, None, e.message))
        except Exception as e:
            results.append(GenerationResult(student_id, student.full_name, False, None, str(e)))
            tqdm.write(f"  ❌ Failed {student_id}: {str(e)[:50]}")

    failed = [r for r in results if not r.success]
    print(f"✅ Generated {len(results) - len(failed)} of {len(results)} transcripts")
    for result in failed:
        print(f"  ❌ [{result.student_id}] {result.student_name}: {result.error}")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcript-tracker",
        description="GPA, credit and graduation-requirement reports for homeschool transcripts",
    )
    parser.add_argument("--data-dir", type=Path, help="Directory holding the CSV exports")
    parser.add_argument(
        "--points-policy",
        choices=["stored", "recompute"],
        help="Use stored grade points or recompute them from letter, scale and level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    gpa = subparsers.add_parser("gpa", help="GPA for one student")
    gpa.add_argument("student_id")
    gpa.add_argument("--year", help="Limit to one academic year, e.g. 2023-2024")
    gpa.set_defaults(func=cmd_gpa)

    requirements = subparsers.add_parser("requirements", help="Graduation requirement progress")
    requirements.add_argument("student_id")
    requirements.set_defaults(func=cmd_requirements)

    validate = subparsers.add_parser("validate", help="Check whether a transcript can be generated")
    validate.add_argument("student_id")
    validate.set_defaults(func=cmd_validate)

    summary = subparsers.add_parser("summary", help="GPA overview for every student")
    summary.set_defaults(func=cmd_summary)

    generate = subparsers.add_parser("generate", help="Write one PDF transcript")
    generate.add_argument("student_id")
    generate.add_argument("--output", type=Path, help="PDF path (defaults to the output dir)")
    generate.set_defaults(func=cmd_generate)

    batch = subparsers.add_parser("batch", help="Write PDF transcripts for every student")
    batch.add_argument("--output-dir", type=Path, help="Directory for the PDFs")
    batch.set_defaults(func=cmd_batch)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.data_dir is not None:
        overrides["data_dir"] = args.data_dir
    if args.points_policy is not None:
        overrides["gpa_points_policy"] = args.points_policy
    if getattr(args, "output_dir", None) is not None:
        overrides["output_dir"] = args.output_dir
    settings = get_settings().model_copy(update=overrides)

    logging.basicConfig(level=settings.log_level_value, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args, settings)
    except TranscriptTrackerError as e:
        logger.error(f"❌ {e.message}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
