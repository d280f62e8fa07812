"""Kritrim error taxonomy."""

from __future__ import annotations


class KritrimError(RuntimeError):
    """Base class for every error raised by the engine."""


class InvalidImageFormat(KritrimError):
    def __init__(self, message: str = "Invalid image data URL format. Expected 'data:image/...;base64,...'") -> None:
        super().__init__(message)


class MissingSourceImage(KritrimError):
    def __init__(self, message: str = "Upload a photo before generating.") -> None:
        super().__init__(message)


class GenerationError(KritrimError):
    """A single generation job could not produce an image."""


class GenerationBlocked(GenerationError):
    """Both the original and the fallback prompt came back without an image."""

    def __init__(self, *, context: str, classification: str, fallback_prompt: str, last_text: str | None) -> None:
        self.context = context
        self.classification = classification
        self.fallback_prompt = fallback_prompt
        self.last_text = last_text
        detail = last_text or "No text response received."
        super().__init__(
            "The AI model failed with both original and fallback prompts "
            f"({classification} fallback for {context!r}). Last response: \"{detail}\""
        )


class GenerationFailed(GenerationError):
    """Transport or server error that survived the retry budget."""

    def __init__(self, detail: str, *, stage: str = "primary") -> None:
        self.detail = detail
        self.stage = stage
        if stage == "fallback":
            message = f"The AI model failed with both original and fallback prompts. Last error: {detail}"
        else:
            message = f"The AI model failed to generate an image. Details: {detail}"
        super().__init__(message)


class SelectionError(KritrimError):
    """User input is incomplete or out of bounds; no request is issued."""


class MissingSelection(SelectionError):
    pass


class MissingRequiredField(SelectionError):
    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        joined = " and ".join(self.fields)
        super().__init__(f"Please describe the {joined} (required fields) to build a prompt.")


class TooManyEras(SelectionError):
    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(f"Select at most {limit} eras for a quick trip ({count} selected).")


class JobError(KritrimError):
    pass


class MissingPrompt(JobError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__("Could not find original prompt to regenerate.")


class JobInProgress(JobError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Job {key!r} is still pending.")


SUGGESTION_RETRY_MESSAGE = "Failed to get a suggestion. Please try again."


class SuggestionError(KritrimError):
    def __init__(self, message: str = SUGGESTION_RETRY_MESSAGE) -> None:
        super().__init__(message)


class SuggestionFailed(SuggestionError):
    pass


class EmptySuggestion(SuggestionError):
    pass


class InvalidCategory(SuggestionError):
    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(f"Invalid category for surprise me suggestion: {category!r}")
