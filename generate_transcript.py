#!/usr/bin/env python3
"""
Simple wrapper to generate a transcript for a given student ID
Usage: python3 generate_transcript.py <student_id> <output_dir> [data_dir]
"""

import sys
from pathlib import Path

from transcript_tracker.cli import main

if len(sys.argv) < 3:
    print("ERROR: Missing arguments")
    print("Usage: python3 generate_transcript.py <student_id> <output_dir> [data_dir]")
    sys.exit(1)

student_id = sys.argv[1]
output_dir = Path(sys.argv[2]).expanduser()

argv = []
if len(sys.argv) > 3:
    argv += ["--data-dir", sys.argv[3]]
argv += ["generate", student_id, "--output", str(output_dir / f"{student_id}_transcript.pdf")]

sys.exit(main(argv))
