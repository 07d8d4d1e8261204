# src/youtube_vision/prompts.py
"""Instruction text sent to Gemini for each tool."""

from typing import Any

from youtube_vision.models import SummaryLength, ToolName

DEFAULT_MOMENT_COUNT = 3

DESCRIBE_PROMPT = "Describe this video content in detail."


def build_prompt(tool: ToolName, params: dict[str, Any]) -> str:
    """
    Build the instruction for a tool from its validated parameters.

    Args:
        tool: Tool being invoked (list_supported_models has no prompt)
        params: Parameter mapping, missing keys take their defaults

    Raises:
        ValueError: For a tool without a prompt or a non-positive moment count
    """
    if tool == ToolName.ASK:
        question = params.get("question")
        if question and question.strip():
            return (
                "Please answer the following question based on the provided video content:"
                f"\n\nQuestion: {question}"
            )
        return DESCRIBE_PROMPT

    if tool == ToolName.SUMMARIZE:
        length = params.get("summary_length") or SummaryLength.MEDIUM
        length = SummaryLength(length)
        return f"Please summarize this video. Aim for a {length.value} length summary."

    if tool == ToolName.EXTRACT_MOMENTS:
        count = params.get("number_of_moments")
        if count is None:
            count = DEFAULT_MOMENT_COUNT
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError(f"Invalid number_of_moments: {count}. Must be a positive integer")
        return (
            f"Please extract {count} key moments from this video. "
            "For each moment, provide the timestamp in MM:SS format and a brief description."
        )

    raise ValueError(f"No prompt for tool: {tool}")
