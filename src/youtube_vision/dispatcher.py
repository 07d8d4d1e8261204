# src/youtube_vision/dispatcher.py
"""Routes a tool request through prompt, backend and moment parsing."""

import json
import logging

from pydantic import BaseModel, ValidationError

from youtube_vision.backend import BackendError, GeminiBackend, supports_generation, GENERATE_CONTENT
from youtube_vision.classifier import describe
from youtube_vision.extractor import MomentExtractor
from youtube_vision.models import (
    AskInput,
    ErrorKind,
    ExtractMomentsInput,
    GenerationFailure,
    ListModelsInput,
    MediaReference,
    SummarizeInput,
    ToolName,
    ToolRequest,
    ToolResponse,
)
from youtube_vision.prompts import build_prompt

logger = logging.getLogger(__name__)

INPUT_MODELS: dict[ToolName, type[BaseModel]] = {
    ToolName.ASK: AskInput,
    ToolName.SUMMARIZE: SummarizeInput,
    ToolName.EXTRACT_MOMENTS: ExtractMomentsInput,
    ToolName.LIST_MODELS: ListModelsInput,
}


def error_response(kind: ErrorKind, message: str, details: str | None = None) -> ToolResponse:
    if details:
        message = f"{message} Details: {details}"
    return ToolResponse(payload=message, is_error=True, kind=kind)


class ToolDispatcher:
    """Runs the four tools against a GeminiBackend."""

    def __init__(self, backend: GeminiBackend, extractor: MomentExtractor | None = None):
        self.backend = backend
        self.extractor = extractor or MomentExtractor()

    async def dispatch(self, request: ToolRequest) -> ToolResponse:
        """
        Handle one tool request.

        Unknown tools, invalid arguments and backend failures all come back
        as a ToolResponse with is_error set; this method does not raise.
        """
        try:
            tool = ToolName(request.tool)
        except ValueError:
            logger.error(f"Unknown tool requested: {request.tool}")
            return error_response(ErrorKind.UNKNOWN_TOOL, f"Unknown tool: {request.tool}")

        try:
            params = INPUT_MODELS[tool].model_validate(request.arguments)
        except ValidationError as e:
            logger.error(f"Invalid input for {tool.value}: {e}")
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            return error_response(ErrorKind.VALIDATION, f"Invalid input: {json.dumps(errors)}")

        logger.info(f"Received {tool.value} request")
        try:
            if tool == ToolName.ASK:
                return await self.ask(params)
            if tool == ToolName.SUMMARIZE:
                return await self.summarize(params)
            if tool == ToolName.EXTRACT_MOMENTS:
                return await self.extract_moments(params)
            return await self.list_models()
        except Exception as e:
            logger.exception(f"Unexpected error in {tool.value}: {e}")
            return error_response(
                ErrorKind.UNKNOWN,
                f"Unexpected error in {tool.value}.",
                describe(ErrorKind.UNKNOWN, e),
            )

    async def ask(self, params: AskInput) -> ToolResponse:
        if params.question and params.question.strip():
            logger.info(f"Question: {params.question!r}")
            failure_message = "Failed to answer the question based on the video."
        else:
            logger.info("No question provided, generating general description.")
            failure_message = "Failed to generate description for the video."

        prompt = build_prompt(ToolName.ASK, params.model_dump())
        outcome = await self.backend.invoke(prompt, MediaReference.from_url(params.youtube_url))
        if isinstance(outcome, GenerationFailure):
            return error_response(outcome.kind, failure_message, outcome.message)
        return ToolResponse(payload=outcome.text)

    async def summarize(self, params: SummarizeInput) -> ToolResponse:
        logger.info(f"Summarizing {params.youtube_url} (length: {params.summary_length.value})")

        prompt = build_prompt(ToolName.SUMMARIZE, params.model_dump())
        outcome = await self.backend.invoke(prompt, MediaReference.from_url(params.youtube_url))
        if isinstance(outcome, GenerationFailure):
            return error_response(outcome.kind, "Failed to generate summary for the video.", outcome.message)
        return ToolResponse(payload=outcome.text)

    async def extract_moments(self, params: ExtractMomentsInput) -> ToolResponse:
        logger.info(f"Extracting {params.number_of_moments} key moments from {params.youtube_url}")

        prompt = build_prompt(ToolName.EXTRACT_MOMENTS, params.model_dump())
        outcome = await self.backend.invoke(prompt, MediaReference.from_url(params.youtube_url))
        if isinstance(outcome, GenerationFailure):
            return error_response(outcome.kind, "Failed to extract key moments from the video.", outcome.message)

        extraction = self.extractor.extract(outcome.text)
        if extraction.is_fallback:
            return ToolResponse(payload=extraction.raw_text)
        return ToolResponse(payload=self.extractor.to_json(extraction.moments))

    async def list_models(self) -> ToolResponse:
        try:
            models = await self.backend.list_models()
        except BackendError as e:
            return error_response(e.kind, "Failed to list supported models.", e.message)

        names = [model.name for model in models if supports_generation(model)]
        logger.info(f"Found {len(names)} models supporting {GENERATE_CONTENT}")

        if not names:
            return ToolResponse(payload=f"No models found supporting '{GENERATE_CONTENT}'.")
        listing = "\n- ".join(names)
        return ToolResponse(payload=f"Models supporting '{GENERATE_CONTENT}':\n- {listing}")
