# src/youtube_vision/classifier.py
"""
Best-effort classification of Gemini API failures.

Gemini does not document its error texts, so these rules are a heuristic
match on the message and not a contract with the service. Call sites only
depend on classify() and describe(); the rules can change here alone.
"""

from youtube_vision.models import ErrorKind

# Checked in order, first match wins
MESSAGE_RULES: list[tuple[ErrorKind, tuple[str, ...]]] = [
    (ErrorKind.AUTH, ("api key", "permission denied")),
    (ErrorKind.QUOTA_EXCEEDED, ("quota",)),
    (ErrorKind.INVALID_INPUT, ("invalid",)),
    (ErrorKind.BACKEND_UNAVAILABLE, ("500", "server error", "network issue")),
]

PREFIXES = {
    ErrorKind.AUTH: "Authentication/Authorization Error with Gemini API",
    ErrorKind.QUOTA_EXCEEDED: "Gemini API quota likely exceeded",
    ErrorKind.INVALID_INPUT: "Invalid input likely provided to Gemini API",
    ErrorKind.BACKEND_UNAVAILABLE: "Gemini API server error or network issue",
}
DEFAULT_PREFIX = "Gemini API Error"


def error_message(error: object) -> str:
    """Message text of an exception, or the str() of anything else."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    try:
        return str(error)
    except Exception:
        return f"<unprintable {type(error).__name__}>"


def _status_code(error: object) -> int | None:
    for attr in ("code", "status_code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def classify_status(code: int) -> ErrorKind:
    """Map an HTTP status code to an error kind."""
    if code in (401, 403):
        return ErrorKind.AUTH
    if code == 429:
        return ErrorKind.QUOTA_EXCEEDED
    if 400 <= code < 500:
        return ErrorKind.INVALID_INPUT
    if code >= 500:
        return ErrorKind.BACKEND_UNAVAILABLE
    return ErrorKind.UNKNOWN


def classify(error: object) -> ErrorKind:
    """Return the error kind for a backend failure. Never raises."""
    try:
        text = str(error).lower()
    except Exception:
        return ErrorKind.UNKNOWN

    for kind, needles in MESSAGE_RULES:
        if any(needle in text for needle in needles):
            return kind

    # Fall back to the HTTP status carried by SDK errors
    code = _status_code(error)
    if code is not None:
        return classify_status(code)
    return ErrorKind.UNKNOWN


def describe(kind: ErrorKind, error: object) -> str:
    """Human-readable diagnostic: kind prefix plus the original text."""
    prefix = PREFIXES.get(kind, DEFAULT_PREFIX)
    return f"{prefix}: {error_message(error)}"
