"""
Classifier - LLM call, response extraction and fallback.

classify() never raises: missing credentials, network errors, API errors
and unparseable answers all turn into Classification.failed(). Callers that
need to know *why* use try_classify(), which returns Ok or Failed.
"""

from dataclasses import dataclass
from typing import Optional, Union

from config import Settings, get_client
from errors import ClassificationError
from models import Classification
from utils.logging import get_logger
from .extract import extract_json_object
from .prompt import build_messages

logger = get_logger(__name__)


@dataclass(frozen=True)
class Ok:
    """Model answered and the answer was coerced into a Classification."""
    classification: Classification


@dataclass(frozen=True)
class Failed:
    """No usable answer. `reason` is for logs, never for clients."""
    reason: str

    @property
    def classification(self) -> Classification:
        return Classification.failed()


ClassificationOutcome = Union[Ok, Failed]


class Classifier:
    """
    Classifies descriptions with an OpenAI-compatible chat model.

    Holds no per-request state; one instance is shared by every request
    thread.
    """

    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self._client = client

    @property
    def client(self):
        """OpenAI client, created on first use."""
        if self._client is None:
            self._client = get_client(self.settings)
        return self._client

    def _complete(self, text: str) -> str:
        if not self.settings.openai_api_key and self._client is None:
            raise ClassificationError("OpenAI API key is not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.settings.classifier_model,
                messages=build_messages(text),
                temperature=self.settings.classifier_temperature,
                max_tokens=self.settings.classifier_max_tokens,
            )
        except Exception as e:
            raise ClassificationError(f"LLM request failed: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise ClassificationError(f"Unexpected LLM response shape: {e}") from e

        return content or ""

    def try_classify(self, text: str) -> ClassificationOutcome:
        """Classify, reporting failure as a value instead of an exception."""
        try:
            content = self._complete(text)
            raw = extract_json_object(content)
        except ClassificationError as e:
            logger.warning("Classification failed: %s", e)
            return Failed(str(e))
        except Exception as e:
            logger.exception("Unexpected classifier error")
            return Failed(f"Unexpected classifier error: {e}")

        classification = Classification.coerce(raw)
        logger.debug(
            "Classified as %s/%s (confidence=%d)",
            classification.industry,
            classification.sentiment,
            classification.confidence_score,
        )
        return Ok(classification)

    def classify(self, text: str) -> Classification:
        """Classify a description. Always returns a complete Classification."""
        return self.try_classify(text).classification


__all__ = ["Classifier", "ClassificationOutcome", "Ok", "Failed"]
