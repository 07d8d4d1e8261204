# src/youtube_vision/extractor.py
"""Key moment parsing from free-form Gemini text."""

import json
import logging
import re

from youtube_vision.models import KeyMoment, MomentExtraction

logger = logging.getLogger(__name__)

# Timestamp (group 1), optional dash separator, description (group 2).
# Searched inside the line so markdown like "* **00:45** - Intro" matches.
MOMENT_PATTERN = re.compile(r"(\d{1,2}:\d{2})\s*[-–—]?\s*(.*)")

# Stripped in order, at most one
DECORATIVE_PREFIXES = ("** - ", "- ")

# A description made only of these is empty
DECORATION_CHARS = "*-–— "


class MomentExtractor:
    """
    Turn generated text into KeyMoment records, one moment per line.

    A description spread over several lines only keeps its first line;
    the rest is skipped as unparsable. The requested moment count is never
    applied here: every moment found is returned, in order.
    """

    def clean_description(self, text: str) -> str:
        """Trim and drop one leading decorative prefix."""
        description = text.strip()
        for prefix in DECORATIVE_PREFIXES:
            if description.startswith(prefix):
                description = description[len(prefix):]
                break
        description = description.strip()
        if not description.strip(DECORATION_CHARS):
            return ""
        return description

    def parse_line(self, line: str) -> KeyMoment | None:
        """Parse one line into a KeyMoment, or None if it has no moment."""
        match = MOMENT_PATTERN.search(line.strip())
        if not match or not match.group(2):
            return None

        description = self.clean_description(match.group(2))
        if not description:
            return None
        return KeyMoment(timestamp=match.group(1), description=description)

    def extract(self, raw_text: str) -> MomentExtraction:
        """
        Parse every line of raw_text.

        Returns:
            MomentExtraction with the moments in order of appearance. If no
            moment was found in non-blank text, raw_text is returned unchanged
            as the fallback and moments is empty.
        """
        moments = []
        for line in raw_text.split("\n"):
            moment = self.parse_line(line)
            if moment is not None:
                moments.append(moment)
            elif line.strip():
                logger.warning(f"Could not parse line in key moments response: {line.strip()!r}")

        if not moments and raw_text.strip():
            logger.warning("Failed to parse any structured moments, returning raw text instead.")
            return MomentExtraction(raw_text=raw_text)

        logger.info(f"Parsed {len(moments)} key moments")
        return MomentExtraction(moments=moments)

    def to_json(self, moments: list[KeyMoment]) -> str:
        """Pretty-printed JSON array of the moments."""
        return json.dumps(
            [moment.model_dump() for moment in moments],
            indent=2,
            ensure_ascii=False,
        )
