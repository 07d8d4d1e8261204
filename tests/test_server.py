# tests/test_server.py
import pytest
from unittest.mock import patch, MagicMock, AsyncMock
from mcp.types import CallToolRequest, CallToolRequestParams
from youtube_vision import server
from youtube_vision.models import ErrorKind, SummaryLength, ToolResponse
from youtube_vision.server import (
    ask_about_youtube_video,
    extract_key_moments,
    list_supported_models,
    summarize_youtube_video,
)

URL = "https://www.youtube.com/watch?v=abc123"


def mock_dispatcher(response: ToolResponse) -> MagicMock:
    dispatcher = MagicMock()
    dispatcher.dispatch = AsyncMock(return_value=response)
    return dispatcher


async def call_tool(name: str, arguments: dict):
    """Send a tools/call request through the MCP server handler."""
    handler = server.mcp._mcp_server.request_handlers[CallToolRequest]
    result = await handler(CallToolRequest(
        method="tools/call",
        params=CallToolRequestParams(name=name, arguments=arguments),
    ))
    return result.root


@pytest.mark.asyncio
async def test_summarize_returns_payload():
    dispatcher = mock_dispatcher(ToolResponse(payload="Short summary"))
    with patch.object(server, "get_dispatcher", return_value=dispatcher):
        result = await summarize_youtube_video(youtube_url=URL, summary_length=SummaryLength.SHORT)

    assert not result.isError
    assert result.content[0].text == "Short summary"
    request = dispatcher.dispatch.await_args.args[0]
    assert request.tool == "summarize_youtube_video"
    assert request.arguments == {"youtube_url": URL, "summary_length": SummaryLength.SHORT}


@pytest.mark.asyncio
async def test_error_payload_reaches_client_unchanged():
    payload = "Failed to generate summary for the video. Details: Gemini API Error: X"
    dispatcher = mock_dispatcher(ToolResponse(payload=payload, is_error=True, kind=ErrorKind.UNKNOWN))
    with patch.object(server, "get_dispatcher", return_value=dispatcher):
        result = await call_tool("summarize_youtube_video", {"youtube_url": URL})

    assert result.isError is True
    assert len(result.content) == 1
    assert result.content[0].text == payload


@pytest.mark.asyncio
async def test_invalid_input_payload_reaches_client_unchanged():
    payload = 'Invalid input: [{"type": "greater_than", "loc": ["number_of_moments"]}]'
    dispatcher = mock_dispatcher(ToolResponse(payload=payload, is_error=True, kind=ErrorKind.VALIDATION))
    with patch.object(server, "get_dispatcher", return_value=dispatcher):
        result = await call_tool("extract_key_moments", {"youtube_url": URL, "number_of_moments": 0})

    assert result.isError is True
    assert result.content[0].text == payload


@pytest.mark.asyncio
async def test_success_through_mcp_handler():
    dispatcher = mock_dispatcher(ToolResponse(payload='[\n  {\n    "timestamp": "0:10"\n  }\n]'))
    with patch.object(server, "get_dispatcher", return_value=dispatcher):
        result = await call_tool("extract_key_moments", {"youtube_url": URL, "number_of_moments": 2})

    assert not result.isError
    assert result.content[0].text.startswith("[\n  {")
    assert dispatcher.dispatch.await_args.args[0].arguments["number_of_moments"] == 2


@pytest.mark.asyncio
async def test_ask_passes_optional_question():
    dispatcher = mock_dispatcher(ToolResponse(payload="A description"))
    with patch.object(server, "get_dispatcher", return_value=dispatcher):
        await ask_about_youtube_video(youtube_url=URL)

    request = dispatcher.dispatch.await_args.args[0]
    assert request.arguments == {"youtube_url": URL, "question": None}


@pytest.mark.asyncio
async def test_extract_key_moments_passes_count():
    dispatcher = mock_dispatcher(ToolResponse(payload="[]"))
    with patch.object(server, "get_dispatcher", return_value=dispatcher):
        result = await extract_key_moments(youtube_url=URL, number_of_moments=4)

    assert result.content[0].text == "[]"
    assert dispatcher.dispatch.await_args.args[0].arguments["number_of_moments"] == 4


@pytest.mark.asyncio
async def test_list_supported_models_takes_no_arguments():
    dispatcher = mock_dispatcher(ToolResponse(payload="No models found supporting 'generateContent'."))
    with patch.object(server, "get_dispatcher", return_value=dispatcher):
        result = await list_supported_models()

    assert not result.isError
    assert result.content[0].text.startswith("No models found")
    assert dispatcher.dispatch.await_args.args[0].arguments == {}


def test_main_exits_without_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    server.get_dispatcher.cache_clear()
    with patch.object(server.mcp, "run") as run:
        with pytest.raises(SystemExit) as exc_info:
            server.main()

    assert exc_info.value.code == 1
    run.assert_not_called()


def test_main_runs_server_with_api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    server.get_dispatcher.cache_clear()
    try:
        with patch.object(server, "GeminiBackend") as backend_cls, patch.object(server.mcp, "run") as run:
            server.main()
            config = backend_cls.call_args.args[0]
    finally:
        server.get_dispatcher.cache_clear()

    assert config.api_key == "test-key"
    run.assert_called_once()
