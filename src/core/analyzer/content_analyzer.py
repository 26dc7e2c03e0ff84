"""
Heuristic content analyzer.

Turns arbitrary text into a main topic, subtopics, per-subtopic details and
keywords using line-oriented pattern matching (Markdown-style headings,
bullet and numbered lists, paragraphs). No language model is involved and the
result only depends on the input text.
"""

import re
from collections import Counter

from src.core.analyzer.stop_words import STOP_WORDS
from src.models.analysis import ContentAnalysis

UNTITLED = "Untitled Content"
ELLIPSIS = "..."

# Title patterns, tried against the start of the text
TITLE_PATTERNS = [
    re.compile(r"#\s*(.+)"),  # Markdown heading
    re.compile(r"(.+?):\s*$"),  # Label followed by a colon
    re.compile(r"(.+?)\n\n"),  # Paragraph followed by a blank line
]

# Structural markers in order of precedence: (line pattern, marker to strip)
STRUCTURE_PATTERNS = [
    (re.compile(r"^#{2,}\s*.+$", re.MULTILINE), re.compile(r"^#+\s*")),  # Headings
    (re.compile(r"^[*\-+]\s*.+$", re.MULTILINE), re.compile(r"^[*\-+]\s*")),  # Bullets
    (re.compile(r"^\d+\.\s*.+$", re.MULTILINE), re.compile(r"^\d+\.\s*")),  # Numbered
]

SECTION_BREAK = re.compile(r"^(#{2,}|[*\-+])")
NUMBERED_LINE = re.compile(r"^\d+\.")
SENTENCE_SPLIT = re.compile(r"[.!?]+")
NON_WORD = re.compile(r"[^\w\s]", re.ASCII)


class ContentAnalyzer:
    """
    Extracts mind map structure from free text.

    `analyze()` never raises: empty input gives the "Untitled Content"
    sentinel and unstructured input falls back to paragraphs and sentences.
    """

    def __init__(
        self,
        max_subtopics: int = 8,
        max_details: int = 5,
        max_keywords: int = 10,
        max_title_length: int = 100,
    ):
        """
        Initialize the analyzer.

        Args:
            max_subtopics: Maximum subtopics kept
            max_details: Maximum details kept per subtopic
            max_keywords: Maximum keywords returned
            max_title_length: Longest line accepted verbatim as a title
        """
        self.max_subtopics = max_subtopics
        self.max_details = max_details
        self.max_keywords = max_keywords
        self.max_title_length = max_title_length

    def analyze(self, content: str) -> ContentAnalysis:
        """
        Analyze text content.

        Args:
            content: Arbitrary text, possibly empty

        Returns:
            ContentAnalysis for the text
        """
        if not content or not content.strip():
            return ContentAnalysis(main_topic=UNTITLED)

        text = content.strip()
        lines = [line for line in text.split("\n") if line.strip()]
        first_line = lines[0] if lines else ""

        subtopics = self.extract_subtopics(text)
        return ContentAnalysis(
            main_topic=self.extract_main_topic(first_line, text),
            subtopics=subtopics,
            details=self.extract_details(text, subtopics),
            keywords=self.extract_keywords(text),
        )

    # ═══════════════════════════════════════════════════════════
    # MAIN TOPIC
    # ═══════════════════════════════════════════════════════════

    def extract_main_topic(self, first_line: str, text: str) -> str:
        """
        Pick a title for the text.

        A short first line without a period is taken as is. Otherwise the
        title patterns are tried, then the first sentence of the first line,
        and finally the first line truncated to 50 characters.
        """
        if len(first_line) < self.max_title_length and "." not in first_line:
            return first_line.strip()

        for pattern in TITLE_PATTERNS:
            match = pattern.match(text)
            if match and len(match.group(1)) < self.max_title_length:
                return match.group(1).strip()

        first_sentence = first_line.split(".")[0]
        if 10 < len(first_sentence) < 80:
            return first_sentence.strip()

        return first_line[:50] + ELLIPSIS if len(first_line) > 50 else first_line

    # ═══════════════════════════════════════════════════════════
    # SUBTOPICS
    # ═══════════════════════════════════════════════════════════

    def extract_subtopics(self, text: str) -> list[str]:
        """
        Collect subtopics from headings, then bullets, then numbered items.

        Falls back to the first sentence of the first five paragraphs when the
        text has none of those markers. Repeated entries are kept in document
        order; they share one details entry.
        """
        subtopics: list[str] = []
        for pattern, marker in STRUCTURE_PATTERNS:
            for match in pattern.finditer(text):
                item = marker.sub("", match.group(0)).strip()
                if 0 < len(item) < 100:
                    subtopics.append(item)

        if not subtopics:
            paragraphs = [p for p in text.split("\n\n") if len(p.strip()) > 20]
            for paragraph in paragraphs[:5]:
                first_sentence = paragraph.split(".")[0].strip()
                if 10 < len(first_sentence) < 100:
                    subtopics.append(first_sentence)

        return subtopics[: self.max_subtopics]

    # ═══════════════════════════════════════════════════════════
    # DETAILS
    # ═══════════════════════════════════════════════════════════

    def extract_details(self, text: str, subtopics: list[str]) -> dict[str, list[str]]:
        """Collect up to `max_details` supporting lines for every subtopic."""
        lines = text.split("\n")
        return {
            subtopic: self._section_details(lines, subtopic, text)[: self.max_details]
            for subtopic in subtopics
        }

    def _section_details(self, lines: list[str], subtopic: str, text: str) -> list[str]:
        details: list[str] = []
        needle = subtopic.lower()
        in_section = False

        for line in lines:
            trimmed = line.strip()
            lowered = trimmed.lower()

            # A line mentioning the subtopic (or contained in it, blank lines included)
            # opens its section
            if needle in lowered or lowered in needle:
                in_section = True
                continue

            if not in_section:
                continue
            if SECTION_BREAK.match(trimmed):
                break
            if 10 < len(trimmed) < 200 and not NUMBERED_LINE.match(trimmed):
                details.append(trimmed)

        if not details:
            details = self._leading_sentences(text)
        return details

    @staticmethod
    def _leading_sentences(text: str) -> list[str]:
        sentences = [s for s in SENTENCE_SPLIT.split(text) if len(s.strip()) > 20]
        return [s.strip() for s in sentences[:3] if len(s.strip()) < 150]

    # ═══════════════════════════════════════════════════════════
    # KEYWORDS
    # ═══════════════════════════════════════════════════════════

    def extract_keywords(self, text: str) -> list[str]:
        """
        Most frequent meaningful words, most frequent first.

        Words of three characters or fewer and stop words are ignored. Ties keep
        the order in which the words first appear.
        """
        words = NON_WORD.sub(" ", text.lower()).split()
        counts = Counter(word for word in words if len(word) > 3 and word not in STOP_WORDS)
        return [word for word, _ in counts.most_common(self.max_keywords)]


_default_analyzer = ContentAnalyzer()


def analyze_content(content: str) -> ContentAnalysis:
    """Analyze text with the default limits."""
    return _default_analyzer.analyze(content)
