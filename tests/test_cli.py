"""Tests for the searchselect CLI."""

import httpx
import pytest
import yaml
from click.testing import CliRunner

from searchselect import cli as cli_module
from searchselect.cli import cli
from searchselect.sources import PartnerApiClient


def _serve(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/address/countries":
        return httpx.Response(200, json=[
            {"code": "DE", "name": "Germany"},
            {"code": "FR", "name": "France"},
        ])
    if request.url.path == "/api/partner":
        if request.url.params.get("search") == "boom":
            return httpx.Response(500, json={})
        return httpx.Response(200, json=[
            {"id": "p1", "partnerNumber": "P00000001", "legalName": "Acme Holding AG"},
            {"id": "p2", "partnerNumber": "P00000002", "legalName": "Acme Trading GmbH"},
        ])
    return httpx.Response(404)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({"api": {"base_url": "http://partners.local"}}))
    monkeypatch.setattr(
        cli_module,
        "PartnerApiClient",
        lambda config: PartnerApiClient(config, transport=httpx.MockTransport(_serve)),
    )
    return str(path)


def test_find_prints_matching_options(config_file):
    result = CliRunner().invoke(cli, ["--config", config_file, "find", "countries", "germ"])
    assert result.exit_code == 0, result.output
    assert "Germany" in result.output
    assert "DE" in result.output
    assert "France" not in result.output


def test_find_without_matches(config_file):
    result = CliRunner().invoke(cli, ["--config", config_file, "find", "countries", "xyz"])
    assert result.exit_code == 0
    assert "No results found" in result.output


def test_find_reports_api_error(config_file):
    result = CliRunner().invoke(cli, ["--config", config_file, "find", "partners", "boom"])
    assert result.exit_code == 1
    assert "status 500" in result.output


def test_find_excludes_partner(config_file):
    result = CliRunner().invoke(
        cli, ["--config", config_file, "find", "partners", "acme", "--exclude", "p1"]
    )
    assert result.exit_code == 0, result.output
    assert "p2" in result.output
    assert "Holding" not in result.output


def test_exclude_only_applies_to_partners(config_file):
    result = CliRunner().invoke(
        cli, ["--config", config_file, "find", "countries", "--exclude", "DE"]
    )
    assert result.exit_code == 2
    assert "only applies to partners" in result.output


def test_find_rejects_unknown_kind(config_file):
    result = CliRunner().invoke(cli, ["--config", config_file, "find", "tags"])
    assert result.exit_code == 2


def test_config_command(tmp_path):
    path = tmp_path / "config.yaml"
    result = CliRunner().invoke(cli, ["--config", str(path), "config"])
    assert result.exit_code == 0
    assert "Config file" in result.output
    assert "http://localhost:8084" in result.output
    assert path.exists()
