"""Model router resolution tests.

Covers provider/model splitting, default provider fallback, configuration
priority (override > named config > built-in), credential resolution and the
error kinds for unknown providers, missing keys and missing base URLs.
"""
from __future__ import annotations

import pytest

from llm_bridge.base.dto import ProviderConfig, RouterConfig
from llm_bridge.base.errors import ErrorCode, ProviderError
from llm_bridge.base.models import ProviderKind
from llm_bridge.base.routing import ModelRouter, resolve_target, split_model


def test_split_model_uses_first_slash_only():
    assert split_model("openrouter/meta-llama/llama-3.3") == ("openrouter", "meta-llama/llama-3.3")  # nosec B101
    assert split_model("gpt-4o") == (None, "gpt-4o")  # nosec B101


def test_unprefixed_model_falls_back_to_openai(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    target = resolve_target("gpt-4o-mini")
    assert target.provider == "openai"  # nosec B101
    assert target.model == "gpt-4o-mini"  # nosec B101
    assert target.base_url == "https://api.openai.com/v1"  # nosec B101
    assert target.credential == "sk-env"  # nosec B101
    assert target.kind is ProviderKind.OPENAI_COMPATIBLE  # nosec B101


def test_configured_default_provider(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ak")
    target = ModelRouter(RouterConfig(default_provider="anthropic")).resolve("claude-sonnet-4-5")
    assert target.provider == "anthropic"  # nosec B101
    assert target.kind is ProviderKind.ANTHROPIC  # nosec B101
    assert target.base_url == "https://api.anthropic.com"  # nosec B101


def test_nested_model_path_is_preserved(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "or")
    target = resolve_target("openrouter/anthropic/claude-3.5-sonnet")
    assert target.provider == "openrouter"  # nosec B101
    assert target.model == "anthropic/claude-3.5-sonnet"  # nosec B101


def test_unknown_provider_without_config_is_not_found():
    with pytest.raises(ProviderError) as ei:
        resolve_target("acme/model-x")
    assert ei.value.code is ErrorCode.PROVIDER_NOT_FOUND  # nosec B101
    assert ei.value.provider == "acme"  # nosec B101


def test_named_config_beats_builtin():
    config = RouterConfig().with_provider(
        "openai", ProviderConfig(base_url="http://localhost:4000/v1", api_key="inline")
    )
    target = resolve_target("openai/gpt-4o", config)
    assert target.base_url == "http://localhost:4000/v1"  # nosec B101
    assert target.credential == "inline"  # nosec B101


def test_override_beats_named_config():
    config = RouterConfig().with_provider("local", ProviderConfig(base_url="http://a", api_key="a"))
    override = ProviderConfig(base_url="http://b/", api_key="b", extra_headers={"x-team": "t"})
    target = resolve_target("local/llama", config, override=override)
    assert target.base_url == "http://b"  # nosec B101
    assert target.credential == "b"  # nosec B101
    assert dict(target.extra_headers) == {"x-team": "t"}  # nosec B101


def test_no_auth_provider_has_no_credential():
    config = RouterConfig().with_provider("ollama", ProviderConfig(base_url="http://localhost:11434/v1").without_auth())
    target = resolve_target("ollama/llama3", config)
    assert target.credential is None  # nosec B101


def test_missing_env_key_names_the_variable():
    with pytest.raises(ProviderError) as ei:
        resolve_target("xai/grok-4")
    assert ei.value.code is ErrorCode.MISSING_API_KEY  # nosec B101
    assert "XAI_API_KEY" in ei.value.message  # nosec B101
    assert ei.value.model == "grok-4"  # nosec B101


def test_empty_env_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "   ")
    with pytest.raises(ProviderError) as ei:
        resolve_target("openai/gpt-4o")
    assert ei.value.code is ErrorCode.MISSING_API_KEY  # nosec B101


def test_config_without_key_source_names_the_provider():
    config = RouterConfig().with_provider("corp", ProviderConfig(base_url="https://llm.corp"))
    with pytest.raises(ProviderError) as ei:
        resolve_target("corp/m", config)
    assert ei.value.code is ErrorCode.MISSING_API_KEY  # nosec B101
    assert "corp" in ei.value.message  # nosec B101


def test_config_without_base_url_is_config_error():
    config = RouterConfig().with_provider("corp", ProviderConfig(api_key="k"))
    with pytest.raises(ProviderError) as ei:
        resolve_target("corp/m", config)
    assert ei.value.code is ErrorCode.CONFIG  # nosec B101
    assert "base_url required" in ei.value.message  # nosec B101


def test_custom_api_key_env(monkeypatch):
    monkeypatch.setenv("CORP_TOKEN", "tok")
    config = RouterConfig().with_provider(
        "corp", ProviderConfig(base_url="https://llm.corp", api_key_env="CORP_TOKEN")
    )
    assert resolve_target("corp/m", config).credential == "tok"  # nosec B101


def test_gemini_accepts_google_api_key_alias(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "g-alias")
    target = resolve_target("gemini/gemini-2.5-flash")
    assert target.credential == "g-alias"  # nosec B101
    assert target.kind is ProviderKind.GEMINI  # nosec B101


def test_builtin_base_url_env_override(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "k")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://proxy.local/v1/")
    assert resolve_target("openai/gpt-4o").base_url == "http://proxy.local/v1"  # nosec B101


def test_credential_hidden_from_repr(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-secret-value")
    target = resolve_target("gpt-4o")
    assert "sk-secret-value" not in repr(target)  # nosec B101
    assert "sk-secret-value" not in repr(ProviderConfig(api_key="sk-secret-value"))  # nosec B101


def test_targets_are_not_cached(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "first")
    router = ModelRouter()
    first = router.resolve("gpt-4o")
    monkeypatch.setenv("OPENAI_API_KEY", "second")
    assert router.resolve("gpt-4o").credential == "second"  # nosec B101
    assert first.credential == "first"  # nosec B101
