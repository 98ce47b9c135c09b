import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from notion_heatmap.core.observability import configure_logging
from notion_heatmap.main import main


@pytest.fixture
def sentry_init_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, object]]:
    calls: list[dict[str, object]] = []

    def fake_init(**kwargs):
        calls.append(kwargs)

    monkeypatch.setattr("notion_heatmap.core.observability.sentry_sdk.init", fake_init)
    return calls


@pytest.fixture
def notion_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.setenv("DATABASE_ID", "db-1")
    monkeypatch.setenv("NOTION_TOKEN", "secret")
    monkeypatch.setenv("YEAR", "2024")
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    monkeypatch.setattr(
        "notion_heatmap.services.heatmap_service.query_database",
        lambda **kwargs: [],
    )
    root = logging.getLogger()
    monkeypatch.setattr(root, "level", root.level)
    return tmp_path


def test_main_initializes_sentry_from_environment(
    monkeypatch: pytest.MonkeyPatch,
    notion_env: Path,
    sentry_init_calls: list[dict[str, object]],
) -> None:
    """Sentry receives DSN, environment and release read from env vars."""

    monkeypatch.setenv("SENTRY_DSN", "https://examplePublicKey@o0.ingest.sentry.io/0")
    monkeypatch.setenv("ENVIRONMENT", "ci")
    monkeypatch.setenv("RELEASE", "nightly-42")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.5")

    assert main() == 0

    assert (notion_env / "heatmap.png").exists()
    assert sentry_init_calls == [
        {
            "dsn": "https://examplePublicKey@o0.ingest.sentry.io/0",
            "environment": "ci",
            "release": "nightly-42",
            "traces_sample_rate": 0.5,
            "send_default_pii": False,
        }
    ]


def test_main_leaves_sentry_disabled_without_dsn(
    notion_env: Path, sentry_init_calls: list[dict[str, object]]
) -> None:
    """No DSN in the environment means the SDK is never initialized."""

    assert main() == 0
    assert sentry_init_calls == []


def test_main_applies_log_level_from_environment(
    monkeypatch: pytest.MonkeyPatch,
    notion_env: Path,
    sentry_init_calls: list[dict[str, object]],
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert main() == 0
    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_overrides_existing_root_level(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "level", logging.DEBUG)

    configure_logging("warning")

    assert root.level == logging.WARNING


def test_main_returns_1_for_invalid_environment_value(
    monkeypatch: pytest.MonkeyPatch,
    notion_env: Path,
    sentry_init_calls: list[dict[str, object]],
) -> None:
    """A malformed setting fails the run instead of escaping main()."""

    captured: list[BaseException] = []
    queried: list[dict[str, object]] = []
    monkeypatch.setenv("YEAR", "abc")
    monkeypatch.setattr(
        "notion_heatmap.main.sentry_sdk.capture_exception", captured.append
    )
    monkeypatch.setattr(
        "notion_heatmap.services.heatmap_service.query_database",
        lambda **kwargs: queried.append(kwargs) or [],
    )

    assert main() == 1

    assert len(captured) == 1
    assert isinstance(captured[0], ValidationError)
    assert queried == []
    assert not (notion_env / "heatmap.png").exists()
