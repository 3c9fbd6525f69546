"""
Pain point classification.

Exports:
    build_messages: Builds the system + user chat request for a description.
    extract_json_object: Recovers the JSON object from a model response.
    Classifier: Calls the model and always returns a complete Classification.
    Ok, Failed: Tagged outcome returned by Classifier.try_classify.
"""

from .prompt import build_messages
from .extract import extract_json_object
from .classify import Classifier, ClassificationOutcome, Ok, Failed

__all__ = [
    "build_messages",
    "extract_json_object",
    "Classifier",
    "ClassificationOutcome",
    "Ok",
    "Failed",
]
