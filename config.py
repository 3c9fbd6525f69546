"""
Configuration and shared constants for PainSignal.

Settings are read from the environment once at process start
(Settings.from_env) and passed explicitly to the services that need them.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv

from openai import OpenAI

# Client cache keyed by (api_key, base_url) so request threads share one client
_client_cache: dict = {}

# Paths
DATA_DIR = Path("data")

# Collections
PRIMARY_COLLECTION = "painpoints"
PUBLIC_COLLECTION = "publicPainPoints"
WAITLIST_COLLECTION = "waitlist"

# Classification fallbacks
DEFAULT_INDUSTRY = "unknown"
DEFAULT_SENTIMENT = "neutral"
DEFAULT_CONFIDENCE = 0
DEFAULT_EXPLANATION = "No explanation provided."
FAILED_EXPLANATION = "Classification failed; no explanation available."

TEST_MARKER = "[test]"

CLASSIFIER_SYSTEM_PROMPT = """You classify user-submitted pain points.

A pain point is a short description of a problem someone experiences with a
product, service, process or industry. Read it and judge:

- clarity: is the problem concrete and understandable?
- emotional intensity: how strongly does the author feel about it?
- actionability: could a product or service plausibly solve it?
- relatability: would many other people recognise this problem?
- uniqueness: is it specific rather than a generic complaint?

From that judgement produce:

- "industry": the industry or market the problem belongs to (e.g. "SaaS",
  "Healthcare", "Logistics", "Fintech").
- "sentiment": the dominant emotion of the author (e.g. "Frustration",
  "Anxiety", "Annoyance", "Neutral").
- "confidenceScore": an integer from 0 to 100 saying how confident you are
  that this is a real, actionable pain point.
    0-30   low: vague, joking, or not a problem at all
    31-69  medium: a real problem but unclear or generic
    70-100 high: clear, intense, actionable and relatable
- "confidenceExplanation": one or two sentences justifying the score with
  reference to the criteria above.

Respond ONLY with a JSON object with exactly these four keys. No markdown,
no code fences, no text before or after.

{"industry": "...", "sentiment": "...", "confidenceScore": 0, "confidenceExplanation": "..."}
"""


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """
    Process configuration.

    Built once at startup and handed to the Classifier, NotificationSink,
    repositories and the Flask app. Nothing below the app factory reads
    the environment directly.
    """
    # Classifier
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    classifier_model: str = "gpt-4"
    classifier_temperature: float = 0.3
    classifier_max_tokens: int = 300

    # Storage
    storage_backend: str = "json"
    data_dir: Path = DATA_DIR
    firestore_project: Optional[str] = None
    firestore_credentials: Optional[str] = None
    primary_collection: str = PRIMARY_COLLECTION
    public_collection: str = PUBLIC_COLLECTION
    waitlist_collection: str = WAITLIST_COLLECTION

    # Public path limits
    public_max_entries: int = 1000
    public_max_description: int = 5000
    recent_limit: int = 50

    # Notifications (Resend)
    resend_api_key: Optional[str] = None
    email_from: Optional[str] = None
    email_to: Optional[str] = None

    # Runtime
    environment: str = "production"
    port: int = 3000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load .env (if present) and build settings from the environment."""
        load_dotenv()
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            classifier_model=os.getenv("CLASSIFIER_MODEL", "gpt-4"),
            classifier_temperature=_float_env("CLASSIFIER_TEMPERATURE", 0.3),
            classifier_max_tokens=_int_env("CLASSIFIER_MAX_TOKENS", 300),
            storage_backend=os.getenv("STORAGE_BACKEND", "json").lower(),
            data_dir=Path(os.getenv("DATA_DIR", str(DATA_DIR))),
            firestore_project=os.getenv("FIRESTORE_PROJECT") or None,
            firestore_credentials=os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or None,
            public_max_entries=_int_env("PUBLIC_MAX_ENTRIES", 1000),
            public_max_description=_int_env("PUBLIC_MAX_DESCRIPTION", 5000),
            recent_limit=_int_env("RECENT_LIMIT", 50),
            resend_api_key=os.getenv("RESEND_API_KEY") or None,
            email_from=os.getenv("EMAIL_FROM") or None,
            email_to=os.getenv("EMAIL_TO") or None,
            environment=(os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "production").lower(),
            port=_int_env("PORT", 3000),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @property
    def is_development(self) -> bool:
        """Development mode shows [test] submissions in listings."""
        return self.environment == "development"

    @property
    def notifications_enabled(self) -> bool:
        return bool(self.resend_api_key and self.email_from and self.email_to)


def get_client(settings: Settings) -> OpenAI:
    """
    Get a cached OpenAI client for these settings.

    openai_base_url points the client at any OpenAI-compatible endpoint
    (Groq, Together, Ollama, ...).
    """
    key = (settings.openai_api_key, settings.openai_base_url)
    if key in _client_cache:
        return _client_cache[key]

    if settings.openai_base_url:
        client = OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
    else:
        client = OpenAI(api_key=settings.openai_api_key)

    _client_cache[key] = client
    return client
