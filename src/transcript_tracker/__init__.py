"""
Transcript tracker - GPA, credits and graduation progress for homeschool transcripts
"""

__version__ = "0.1.0"
