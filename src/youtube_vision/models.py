"""Pydantic models for tool requests, backend outcomes and responses."""

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

YOUTUBE_MIME_TYPE = "video/youtube"


class ToolName(str, Enum):
    ASK = "ask_about_youtube_video"
    SUMMARIZE = "summarize_youtube_video"
    EXTRACT_MOMENTS = "extract_key_moments"
    LIST_MODELS = "list_supported_models"


class SummaryLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class ErrorKind(str, Enum):
    AUTH = "AuthError"
    QUOTA_EXCEEDED = "QuotaExceeded"
    INVALID_INPUT = "InvalidInput"
    BACKEND_UNAVAILABLE = "BackendUnavailable"
    UNKNOWN_TOOL = "UnknownTool"
    VALIDATION = "ValidationError"
    UNKNOWN = "Unknown"


class ToolRequest(BaseModel):
    """A single tool invocation as received from the transport."""
    model_config = ConfigDict(frozen=True)

    tool: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class VideoInput(BaseModel):
    youtube_url: str

    @field_validator("youtube_url")
    @classmethod
    def check_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("Invalid YouTube URL provided.")
        return value


class AskInput(VideoInput):
    question: str | None = None


class SummarizeInput(VideoInput):
    summary_length: SummaryLength = SummaryLength.MEDIUM


class ExtractMomentsInput(VideoInput):
    number_of_moments: PositiveInt = 3


class ListModelsInput(BaseModel):
    pass


class MediaReference(BaseModel):
    """The video handed to the backend as a file-like part."""
    model_config = ConfigDict(frozen=True)

    mime_type: str = YOUTUBE_MIME_TYPE
    uri: str

    @classmethod
    def from_url(cls, url: str) -> "MediaReference":
        return cls(uri=url)


class GenerationSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class GenerationFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str


GenerationOutcome = Union[GenerationSuccess, GenerationFailure]


class KeyMoment(BaseModel):
    """One timestamped moment parsed from generated text."""
    timestamp: str = Field(pattern=r"^\d{1,2}:\d{2}$")
    description: str = Field(min_length=1)


class MomentExtraction(BaseModel):
    """Parsed moments, or the raw text when nothing could be parsed."""
    moments: list[KeyMoment] = []
    raw_text: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.raw_text is not None


class ModelDescriptor(BaseModel):
    """An entry of the backend's model directory."""
    name: str
    supported_actions: list[str] = []


class ToolResponse(BaseModel):
    """Outward result of every tool."""
    payload: str
    is_error: bool = False
    kind: ErrorKind | None = None
