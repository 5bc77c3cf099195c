"""Tests for ${ENV_VAR} collection and substitution."""

import pytest

from assistant_core.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)


class TestCollectMissingVars:
    def test_reports_each_missing_var_once_in_order(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("AAA_MISSING", raising=False)
        monkeypatch.delenv("BBB_MISSING", raising=False)
        data = {
            "x": "${BBB_MISSING}",
            "y": ["${AAA_MISSING}", {"z": "prefix-${BBB_MISSING}"}],
        }

        assert collect_missing_vars(data) == ["BBB_MISSING", "AAA_MISSING"]

    def test_vars_with_fallback_are_not_missing(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("OPTIONAL_VAR", raising=False)

        assert collect_missing_vars({"x": "${OPTIONAL_VAR:-}"}) == []

    def test_set_vars_are_not_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRESENT_VAR", "1")

        assert collect_missing_vars(["${PRESENT_VAR}"]) == []


class TestInterpolate:
    def test_substitutes_nested_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOST", "example.com")
        data = {"url": "https://${HOST}/v1", "list": ["${HOST}"], "n": 3, "b": None}

        assert interpolate(data) == {
            "url": "https://example.com/v1",
            "list": ["example.com"],
            "n": 3,
            "b": None,
        }

    def test_fallback_used_when_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REGION", raising=False)

        assert interpolate("${REGION:-eu-west-1}") == "eu-west-1"

    def test_empty_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SUFFIX", raising=False)

        assert interpolate("name${SUFFIX:-}") == "name"

    def test_text_without_references_is_unchanged(self) -> None:
        assert interpolate("plain $HOME text") == "plain $HOME text"
