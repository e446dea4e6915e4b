"""
TRANSCRIPT GENERATOR - HTML/PDF rendering of computed transcript data

GENERATION PROCESS:
1. Load the student's records (TranscriptDataProcessor)
2. Build transcript data (TranscriptBuilder)
3. Render the HTML template with Jinja2
4. Convert HTML to PDF with WeasyPrint
5. Save to the output directory

Layout is deliberately plain; the numbers come from the core calculators.

Dependencies: Jinja2, WeasyPrint
"""

import logging
import re
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import Settings
from .core.calculators.gpa import GPACalculator
from .core.exceptions import TranscriptTrackerError
from .core.models.calculations import TranscriptData
from .core.transcript import TranscriptBuilder
from .data_processor import TranscriptDataProcessor

logger = logging.getLogger(__name__)

PACKAGE_TEMPLATES_DIR = Path(__file__).parent / "templates"
TRANSCRIPT_TEMPLATE = "transcript.html"


def format_credits(value: float) -> str:
    """1.0 -> '1.0', 0.25 -> '0.25'"""
    text = f"{value:.2f}"
    return text[:-1] if text.endswith("0") else text


def pdf_filename(transcript: TranscriptData) -> str:
    student = transcript.student
    name = re.sub(r"[^A-Za-z0-9]+", "_", f"{student.first_name}_{student.last_name}").strip("_")
    return f"{student.id}_{name}_transcript.pdf"


class TranscriptGenerator:
    """Render transcripts to HTML and PDF"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        data_processor: Optional[TranscriptDataProcessor] = None,
        builder: Optional[TranscriptBuilder] = None,
    ):
        """
        Initialize transcript generator

        Args:
            settings: Paths, school name and GPA points policy
            data_processor: Loaded data source; created from settings.data_dir if omitted
            builder: Transcript builder; created from settings if omitted
        """
        self.settings = settings or Settings()
        self.templates_dir = Path(self.settings.templates_dir or PACKAGE_TEMPLATES_DIR)
        self.output_dir = Path(self.settings.output_dir)

        self.data_processor = data_processor or TranscriptDataProcessor(self.settings.data_dir)
        self.builder = builder or TranscriptBuilder(
            GPACalculator(self.settings.gpa_points_policy)
        )

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.env.filters["gpa"] = lambda value: f"{value:.2f}"
        self.env.filters["credits"] = format_credits

    def build_transcript(self, student_id: str) -> TranscriptData:
        """Build transcript data for one student from the loaded records"""
        if not self.data_processor.loaded:
            self.data_processor.load_or_raise()

        record = self.data_processor.get_student_record(student_id)
        return self.builder.build(
            record.student,
            record.courses,
            record.grades,
            record.test_scores,
            achievements=record.achievements,
            activities=record.activities,
        )

    def render_html(self, transcript: TranscriptData) -> str:
        template = self.env.get_template(TRANSCRIPT_TEMPLATE)
        return template.render(
            transcript=transcript,
            student=transcript.student,
            school_name=self.settings.school_name,
        )

    def write_pdf(self, transcript: TranscriptData, output_path: Optional[Path] = None) -> Path:
        """Render and write one transcript PDF, returning its path"""
        from weasyprint import HTML

        if output_path is None:
            output_path = self.output_dir / pdf_filename(transcript)
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        html = self.render_html(transcript)
        HTML(string=html, base_url=str(self.templates_dir)).write_pdf(str(output_path))

        logger.info(f"✅ Transcript saved to: {output_path}")
        return output_path

    def generate_transcript(self, student_id: str, output_path: Optional[Path] = None) -> Path:
        """Build and write the PDF transcript for one student"""
        transcript = self.build_transcript(student_id)
        for warning in transcript.validation.warnings:
            logger.warning(f"⚠️ {warning}")
        if not transcript.validation.can_generate:
            raise TranscriptTrackerError(
                f"{transcript.student.full_name}: {'; '.join(transcript.validation.issues)}",
                code="CANNOT_GENERATE",
            )
        return self.write_pdf(transcript, output_path)


__all__ = ["TranscriptGenerator", "format_credits", "pdf_filename"]
