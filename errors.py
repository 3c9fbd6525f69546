"""
Exceptions for the ingestion pipeline.

Routes map these onto HTTP status codes; nothing outside the Classifier
ever sees a ClassificationError.
"""


class PainSignalError(Exception):
    """Base exception for pipeline errors."""
    pass


class ValidationError(PainSignalError):
    """Bad or missing client input. Always a 4xx, never retried."""
    pass


class DuplicateError(ValidationError):
    """The submitted value already exists (409)."""
    pass


class ClassificationError(PainSignalError):
    """LLM, network or parse failure. Recovered inside the Classifier."""
    pass


class ParseError(ClassificationError):
    """Model response contained no parseable JSON object."""
    pass


class PersistenceError(PainSignalError):
    """Document store unavailable or write rejected (5xx)."""
    pass


class NotificationError(PainSignalError):
    """Email dispatch failed. Logged, never surfaced."""
    pass
