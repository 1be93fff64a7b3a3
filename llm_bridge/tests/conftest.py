"""Pytest configuration for the llm_bridge test suite.

Fixtures keep tests hermetic: provider credentials and base URL overrides
from the developer's shell are removed, and log events are captured from the
shared ``llm_bridge`` logger (which does not propagate to the root logger).
"""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from llm_bridge.base.logging import BASE_LOGGER_NAME, get_logger

from .utils import ListHandler, RecordingSleep

_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENROUTER_API_KEY",
    "ANTHROPIC_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "XAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENROUTER_BASE_URL",
    "ANTHROPIC_BASE_URL",
    "GEMINI_BASE_URL",
    "XAI_BASE_URL",
    "LLM_BRIDGE_GEMINI_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture()
def log_events(monkeypatch: pytest.MonkeyPatch) -> Iterator[ListHandler]:
    """Attach a collector to the base logger for the duration of a test."""
    # get_logger re-applies the env level on every call
    monkeypatch.setenv("LLM_BRIDGE_LOG_LEVEL", "DEBUG")
    logger = get_logger(BASE_LOGGER_NAME)
    handler = ListHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(previous)


@pytest.fixture()
def fake_sleep() -> RecordingSleep:
    return RecordingSleep()
