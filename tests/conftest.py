"""
Root test configuration.

Test organization:
- unit/        Fast, isolated, no I/O, mocked LLM and in-memory store
- integration/ Component boundaries, real file I/O to temp locations, Flask test client

Run specific levels:
    pytest tests/unit -v           # Fast feedback loop
    pytest tests/integration -v    # Before commit
    pytest tests -v                # Everything
"""

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from config import Settings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast isolated tests")
    config.addinivalue_line("markers", "integration: Component boundary tests")
    config.addinivalue_line("markers", "slow: Tests that take > 1s")


def make_llm_client(content=None, error=None):
    """
    Stand-in for openai.OpenAI.

    Returns `content` from chat.completions.create, or raises `error`.
    """
    client = MagicMock()
    if error is not None:
        client.chat.completions.create.side_effect = error
    else:
        message = SimpleNamespace(content=content)
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=message)]
        )
    return client


@pytest.fixture
def settings(tmp_path):
    """Settings that never touch the real environment."""
    return Settings(
        openai_api_key="test-key",
        storage_backend="memory",
        data_dir=tmp_path / "data",
        public_max_entries=3,
    )


@pytest.fixture
def classification_json():
    """A well-formed model answer."""
    return json.dumps({
        "industry": "SaaS",
        "sentiment": "Frustration",
        "confidenceScore": 82,
        "confidenceExplanation": "Clear, recurring and costly problem.",
    })


@pytest.fixture
def make_llm():
    """Factory fixture for custom LLM answers or failures."""
    return make_llm_client


@pytest.fixture
def llm_client(classification_json):
    """LLM client that always answers with classification_json."""
    return make_llm_client(classification_json)
