"""
Content analysis for MindLoom.

Converts free text into a ContentAnalysis (main topic, subtopics, details,
keywords) with deterministic heuristics.
"""

from src.core.analyzer.content_analyzer import ContentAnalyzer, analyze_content
from src.core.analyzer.stop_words import STOP_WORDS

__all__ = [
    "ContentAnalyzer",
    "analyze_content",
    "STOP_WORDS",
]
