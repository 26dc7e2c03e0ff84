"""
Tests for the heuristic content analyzer.

Tests cover:
1. Empty input sentinel
2. Main topic selection
3. Subtopics from headings, bullets, numbered items and paragraphs
4. Per-subtopic details
5. Keyword ranking
"""

import pytest

from src.core.analyzer import ContentAnalyzer, analyze_content
from src.models import ContentAnalysis

PROJECT_PLAN = "Project Plan\n\n## Goals\nShip v1\n\n## Risks\nDelay"


@pytest.fixture
def analyzer():
    """Create analyzer with default limits."""
    return ContentAnalyzer()


@pytest.mark.unit
class TestAnalyze:
    """Test the full analysis."""

    def test_project_plan(self, analyzer):
        """Test headings become subtopics under the first-line title."""
        result = analyzer.analyze(PROJECT_PLAN)

        assert result.main_topic == "Project Plan"
        assert result.subtopics == ["Goals", "Risks"]
        assert set(result.details) == {"Goals", "Risks"}

    def test_empty_content(self, analyzer):
        """Test empty text yields the sentinel."""
        result = analyzer.analyze("")

        assert result == ContentAnalysis(main_topic="Untitled Content")
        assert result.subtopics == []
        assert result.details == {}
        assert result.keywords == []

    def test_whitespace_content(self, analyzer):
        """Test whitespace-only text yields the sentinel."""
        assert analyzer.analyze("   \n\t \n").main_topic == "Untitled Content"

    def test_deterministic(self, analyzer):
        """Test analyzing the same text twice gives equal results."""
        assert analyzer.analyze(PROJECT_PLAN) == analyzer.analyze(PROJECT_PLAN)

    def test_module_function(self):
        """Test analyze_content uses the default analyzer."""
        assert analyze_content(PROJECT_PLAN) == ContentAnalyzer().analyze(PROJECT_PLAN)

    def test_details_keyed_by_subtopic(self, analyzer):
        """Test every subtopic has exactly one details entry."""
        text = "Trip\n- Packing the bags\n- Booking the hotel\n- Renting a car"
        result = analyzer.analyze(text)

        assert list(result.details) == result.subtopics


@pytest.mark.unit
class TestMainTopic:
    """Test title extraction."""

    def test_short_first_line(self, analyzer):
        """Test a short first line without a period is the title."""
        assert analyzer.analyze("Weekly Notes\nSomething happened today.").main_topic == (
            "Weekly Notes"
        )

    def test_markdown_heading_with_period(self, analyzer):
        """Test a heading containing a period is matched by the heading pattern."""
        result = analyzer.analyze("# Release 2.0 overview\nBody text here.")

        assert result.main_topic == "Release 2.0 overview"

    def test_first_sentence(self, analyzer):
        """Test the first sentence is used when the first line has a period."""
        result = analyzer.analyze("This is the opening sentence. It continues with more words.")

        assert result.main_topic == "This is the opening sentence"

    def test_truncated_first_line(self, analyzer):
        """Test a long unpunctuated first line is truncated to 50 characters."""
        first_line = " ".join(["word"] * 30)
        result = analyzer.analyze(first_line)

        assert result.main_topic == first_line[:50] + "..."
        assert len(result.main_topic) == 53


@pytest.mark.unit
class TestSubtopics:
    """Test subtopic extraction."""

    def test_bullets(self, analyzer):
        """Test bullet markers of every kind are stripped."""
        text = "Shopping\n- Apples are great fruit\n- Bananas\n* Cherries\n+ Dates"
        result = analyzer.analyze(text)

        assert result.subtopics == ["Apples are great fruit", "Bananas", "Cherries", "Dates"]

    def test_numbered(self, analyzer):
        """Test numbered items."""
        result = analyzer.analyze("Steps\n1. First step\n2. Second step")

        assert result.subtopics == ["First step", "Second step"]

    def test_headings_before_bullets(self, analyzer):
        """Test headings are collected before bullets."""
        text = "Title\n- bullet one\n## Heading A"
        result = analyzer.analyze(text)

        assert result.subtopics == ["Heading A", "bullet one"]

    def test_single_hash_is_not_subtopic(self, analyzer):
        """Test only headings of level two or deeper count."""
        result = analyzer.analyze("# Title\n### Deep heading\n# Another title")

        assert result.subtopics == ["Deep heading"]

    def test_capped_at_eight(self, analyzer):
        """Test at most eight subtopics are kept."""
        text = "List\n" + "\n".join(f"- Item number {i}" for i in range(12))
        result = analyzer.analyze(text)

        assert len(result.subtopics) == 8
        assert result.subtopics[0] == "Item number 0"

    def test_duplicates_kept(self, analyzer):
        """Test repeated items stay in document order and share one details entry."""
        result = analyzer.analyze("List\n- Alpha\n- Beta\n- Alpha")

        assert result.subtopics == ["Alpha", "Beta", "Alpha"]
        assert list(result.details) == ["Alpha", "Beta"]

    def test_duplicates_count_toward_cap(self, analyzer):
        """Test repeats use up slots before the cut at eight."""
        text = "List\n" + "\n".join(["- Same item"] * 7 + ["- Other item", "- Last item"])
        result = analyzer.analyze(text)

        assert result.subtopics == ["Same item"] * 7 + ["Other item"]

    def test_heading_marker_on_own_line(self, analyzer):
        """Test a bare heading marker takes its text from the following line."""
        assert analyzer.analyze("Notes\n##\nFoo").subtopics == ["Foo"]

    def test_paragraph_fallback(self, analyzer):
        """Test unstructured text falls back to paragraph first sentences."""
        text = (
            "Intro line\n\n"
            "The first paragraph talks about design. More words follow.\n\n"
            "The second paragraph covers testing strategy. The end."
        )
        result = analyzer.analyze(text)

        assert result.subtopics == [
            "The first paragraph talks about design",
            "The second paragraph covers testing strategy",
        ]

    def test_no_subtopics(self, analyzer):
        """Test short unstructured text has no subtopics."""
        assert analyzer.analyze("short").subtopics == []


@pytest.mark.unit
class TestDetails:
    """Test detail extraction."""

    def test_section_lines(self, analyzer):
        """Test lines below a heading up to the next heading."""
        text = (
            "Plan\n"
            "## Goals\n"
            "Ship the first version soon\n"
            "Hire two more engineers\n"
            "## Risks\n"
            "Budget may run out early"
        )
        result = analyzer.analyze(text)

        assert result.details["Goals"] == [
            "Ship the first version soon",
            "Hire two more engineers",
        ]
        assert result.details["Risks"] == ["Budget may run out early"]

    def test_numbered_lines_skipped(self, analyzer):
        """Test numbered lines are not details."""
        text = (
            "Guide\n"
            "## Setup\n"
            "Install the package first\n"
            "1. Run the installer now\n"
            "Configure the settings file"
        )
        result = analyzer.analyze(text)

        assert result.details["Setup"] == [
            "Install the package first",
            "Configure the settings file",
        ]

    def test_capped_at_five(self, analyzer):
        """Test at most five details per subtopic."""
        lines = "\n".join(f"Supporting line number {i}" for i in range(7))
        result = analyzer.analyze(f"Doc\n## Section\n{lines}")

        assert len(result.details["Section"]) == 5
        assert result.details["Section"][0] == "Supporting line number 0"

    def test_sentence_fallback(self, analyzer):
        """Test a subtopic without section lines gets the leading sentences."""
        result = analyzer.analyze(PROJECT_PLAN)

        # "Ship v1" is too short, so the whole text is the only long sentence
        assert result.details["Goals"] == [PROJECT_PLAN]

    def test_blank_line_opens_section(self, analyzer):
        """Test a blank line opens every section, so earlier text is collected."""
        text = "Intro line\n\nThis paragraph explains things.\n- Alpha\n- Beta"
        result = analyzer.analyze(text)

        assert result.details["Alpha"] == ["This paragraph explains things."]
        assert result.details["Beta"] == ["This paragraph explains things."]


@pytest.mark.unit
class TestKeywords:
    """Test keyword extraction."""

    def test_frequency_order(self, analyzer):
        """Test keywords are ranked by frequency without stop words."""
        result = analyzer.analyze("python python python code code testing with the")

        assert result.keywords == ["python", "code", "testing"]

    def test_ties_keep_first_seen_order(self, analyzer):
        """Test equal counts keep first appearance order."""
        assert analyzer.extract_keywords("zeta alpha zeta alpha") == ["zeta", "alpha"]

    def test_punctuation_and_case(self, analyzer):
        """Test punctuation is dropped and words are lowercased."""
        assert analyzer.extract_keywords("Graph, GRAPH! graph?") == ["graph"]

    def test_capped_at_ten(self, analyzer):
        """Test at most ten keywords."""
        text = " ".join(f"keyword{i}" for i in range(15))

        assert len(analyzer.extract_keywords(text)) == 10

    def test_non_ascii_letters_split_words(self, analyzer):
        """Test only ASCII letters and digits count as word characters."""
        assert analyzer.extract_keywords("Sch\u00f6neberg sch\u00f6neberg") == ["neberg"]
