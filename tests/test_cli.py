"""Tests for the Typer CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from finops.agents.recommender.fallback import fallback_recommendation
from finops.cli import app
from finops.schemas.company import CompanyContext
from finops.shared import openai_client

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("OPENAI_API_KEY", "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"):
        monkeypatch.delenv(var, raising=False)


class TestCheck:
    def test_match(self) -> None:
        result = runner.invoke(app, ["check", "CloudZero", "https://www.cloudzero.com"])
        assert result.exit_code == 0
        assert "Match:" in result.output

    def test_mismatch(self) -> None:
        result = runner.invoke(app, ["check", "Acme", "https://globex.com"])
        assert result.exit_code == 1
        assert "Warning:" in result.output


class TestValidate:
    def test_valid_file(self, tmp_request: Path) -> None:
        result = runner.invoke(app, ["validate", "-c", str(tmp_request)])
        assert result.exit_code == 0
        assert "Request is valid!" in result.output
        assert "CloudZero" in result.output
        assert "ppa" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", "-c", str(tmp_path / "nope.yml")])
        assert result.exit_code == 1
        assert "Request validation failed" in result.output


class TestRecommend:
    def test_requires_url(self) -> None:
        result = runner.invoke(app, ["recommend", "--company", "CloudZero", "--offline"])
        assert result.exit_code == 1
        assert "website URL" in result.output

    def test_mismatch_needs_force(self) -> None:
        args = ["recommend", "-n", "Acme", "-u", "https://globex.com", "--offline"]
        result = runner.invoke(app, args)
        assert result.exit_code == 1
        assert "--force" in result.output

        forced = runner.invoke(app, [*args, "--force"])
        assert forced.exit_code == 0

    def test_offline_report(self) -> None:
        result = runner.invoke(
            app,
            ["recommend", "-n", "CloudZero", "-u", "https://www.cloudzero.com", "--genai", "--offline"],
        )
        assert result.exit_code == 0
        assert "# FinOps Recommendations: CloudZero" in result.output
        assert "GenAI-Specific FinOps Insights" in result.output
        assert "PPA Discussion Starters" not in result.output

    def test_dry_run_writes_json(self, tmp_path: Path) -> None:
        out = tmp_path / "reports" / "rec.json"
        result = runner.invoke(
            app,
            [
                "recommend", "-n", "CloudZero", "-u", "https://www.cloudzero.com",
                "--ppa", "--dry-run", "--json", str(out),
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert len(data["unitMetrics"]) == 4
        assert len(data["conversationStarters"]) == 3
        assert list(data["conditionalInsights"]) == ["ppa"]

    def test_missing_key_is_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _refuse(*args, **kwargs):
            raise AssertionError("client must not be built without a usable key")

        monkeypatch.setattr(openai_client, "OpenAIClient", _refuse)
        result = runner.invoke(
            app, ["recommend", "-n", "CloudZero", "-u", "https://www.cloudzero.com"]
        )
        assert result.exit_code == 1
        assert "API configuration error" in result.output

    def test_config_file(self, tmp_request: Path) -> None:
        result = runner.invoke(app, ["recommend", "-c", str(tmp_request), "--offline"])
        assert result.exit_code == 0
        assert "PPA Discussion Starters" in result.output

    def test_bad_timeout_is_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FINOPS_REQUEST_TIMEOUT", "soon")
        result = runner.invoke(
            app, ["recommend", "-n", "CloudZero", "-u", "https://www.cloudzero.com", "--dry-run"]
        )
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_report_lines_are_not_wrapped(self) -> None:
        result = runner.invoke(
            app, ["recommend", "-n", "CloudZero", "-u", "https://www.cloudzero.com", "--offline"]
        )
        assert result.exit_code == 0
        first = fallback_recommendation(CompanyContext(company_name="CloudZero"))
        assert first.unit_metrics[0].description in result.output.splitlines()
