# src/youtube_vision/server.py
"""MCP server exposing Gemini video tools for YouTube URLs."""

import os
import sys
import logging
from functools import lru_cache

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent

from youtube_vision.backend import GeminiBackend
from youtube_vision.config import ConfigError, ServerConfig
from youtube_vision.dispatcher import ToolDispatcher
from youtube_vision.models import SummaryLength, ToolName, ToolRequest

logger = logging.getLogger(__name__)

# Initialize MCP server
mcp = FastMCP("youtube-vision")


@lru_cache
def get_dispatcher() -> ToolDispatcher:
    """Build the dispatcher once from the environment."""
    config = ServerConfig.from_env()
    logger.info(f"Using Gemini model: {config.model_name}")
    return ToolDispatcher(GeminiBackend(config))


async def run_tool(tool: ToolName, arguments: dict) -> CallToolResult:
    """Dispatch a tool call; the payload reaches the client unchanged."""
    response = await get_dispatcher().dispatch(ToolRequest(tool=tool.value, arguments=arguments))
    return CallToolResult(
        content=[TextContent(type="text", text=response.payload)],
        isError=response.is_error,
    )


@mcp.tool(structured_output=False)
async def summarize_youtube_video(
    youtube_url: str,
    summary_length: SummaryLength = SummaryLength.MEDIUM,
) -> CallToolResult:
    """
    Generates a summary of a given YouTube video URL using Gemini Vision API.

    Args:
        youtube_url: Public YouTube video URL
        summary_length: Desired summary length: 'short', 'medium', or 'long'.
                        Default 'medium'
    """
    return await run_tool(ToolName.SUMMARIZE, {
        "youtube_url": youtube_url,
        "summary_length": summary_length,
    })


@mcp.tool(structured_output=False)
async def ask_about_youtube_video(youtube_url: str, question: str | None = None) -> CallToolResult:
    """
    Answers a question about the video or provides a general description
    if no question is asked.

    Args:
        youtube_url: Public YouTube video URL
        question: Question about the video content. If omitted, a general
                  description will be generated.
    """
    return await run_tool(ToolName.ASK, {"youtube_url": youtube_url, "question": question})


@mcp.tool(structured_output=False)
async def extract_key_moments(youtube_url: str, number_of_moments: int = 3) -> CallToolResult:
    """
    Extracts key moments (timestamps and descriptions) from a given YouTube video.

    Args:
        youtube_url: Public YouTube video URL
        number_of_moments: Number of key moments to extract. Default 3

    Returns:
        JSON array of {timestamp, description} objects, or the raw Gemini
        text if no timestamps could be parsed
    """
    return await run_tool(ToolName.EXTRACT_MOMENTS, {
        "youtube_url": youtube_url,
        "number_of_moments": number_of_moments,
    })


@mcp.tool(structured_output=False)
async def list_supported_models() -> CallToolResult:
    """Lists available Gemini models that support the 'generateContent' method."""
    return await run_tool(ToolName.LIST_MODELS, {})


def main():
    """Run the MCP server on stdio."""
    # stdout carries JSON-RPC, log to stderr
    logging.basicConfig(
        level=os.environ.get("YOUTUBE_VISION_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        get_dispatcher()
    except ConfigError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    logger.info("YouTube Vision MCP server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
