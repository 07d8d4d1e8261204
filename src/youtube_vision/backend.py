# src/youtube_vision/backend.py
"""Gemini calls: video generation and the model directory."""

import logging

from google import genai
from google.genai import types

from youtube_vision.classifier import classify, describe
from youtube_vision.config import ServerConfig
from youtube_vision.models import (
    ErrorKind,
    GenerationFailure,
    GenerationOutcome,
    GenerationSuccess,
    MediaReference,
    ModelDescriptor,
)

logger = logging.getLogger(__name__)

GENERATE_CONTENT = "generateContent"


class BackendError(Exception):
    """Classified failure of a Gemini directory query."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def supports_generation(model: ModelDescriptor) -> bool:
    """True if the model advertises generateContent."""
    return GENERATE_CONTENT in model.supported_actions


class GeminiBackend:
    """Wraps the google-genai client for one configured model."""

    def __init__(self, config: ServerConfig, client: genai.Client | None = None):
        self.model_name = config.model_name
        self.client = client if client is not None else genai.Client(api_key=config.api_key)

    def build_contents(self, prompt: str, media: MediaReference) -> types.Content:
        """Instruction text followed by the video as a file part."""
        return types.Content(
            role="user",
            parts=[
                types.Part(text=prompt),
                types.Part(
                    file_data=types.FileData(
                        file_uri=media.uri,
                        mime_type=media.mime_type,
                    )
                ),
            ],
        )

    async def invoke(self, prompt: str, media: MediaReference) -> GenerationOutcome:
        """
        Make exactly one generate_content call for the video.

        Returns:
            GenerationSuccess with the text as returned, or GenerationFailure
            with the classified kind and a prefixed message. Never raises.
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=self.build_contents(prompt, media),
            )
            text = response.text or ""
        except Exception as e:
            kind = classify(e)
            message = describe(kind, e)
            logger.error(f"Gemini API call failed: {message}")
            return GenerationFailure(kind=kind, message=message)

        logger.info(f"Gemini returned {len(text)} characters for {media.uri}")
        return GenerationSuccess(text=text)

    async def list_models(self) -> list[ModelDescriptor]:
        """
        List every model in the Gemini directory.

        Raises:
            BackendError: If the directory query fails
        """
        try:
            models = []
            async for model in await self.client.aio.models.list():
                models.append(ModelDescriptor(
                    name=model.name or "",
                    supported_actions=list(model.supported_actions or []),
                ))
        except Exception as e:
            kind = classify(e)
            message = describe(kind, e)
            logger.error(f"Model listing failed: {message}")
            raise BackendError(kind, message) from e

        logger.info(f"Gemini directory returned {len(models)} models")
        return models
