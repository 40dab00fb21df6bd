"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from gql_opgen.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch, sample_sdl):
    """Temporary working directory holding schema.graphql and no config file."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "schema.graphql").write_text(sample_sdl)
    return tmp_path


class TestGenerate:
    """Tests for the generate command."""

    def test_generates_from_local_schema(self, runner, workdir):
        result = runner.invoke(main, ["generate", "-s", "schema.graphql", "-o", "ops"])

        assert result.exit_code == 0, result.output
        assert "Generating operations..." in result.output
        assert "Done! Generated 7 operation files" in result.output
        assert (workdir / "ops" / "query" / "user.graphql").exists()
        assert (workdir / "ops" / "subscription" / "userCreated.graphql").exists()

    def test_traversal_options(self, runner, workdir):
        result = runner.invoke(main, [
            "generate", "-s", "schema.graphql", "-o", "ops",
            "--circular-refs", "silent", "--max-depth", "2",
        ])

        assert result.exit_code == 0, result.output
        content = (workdir / "ops" / "query" / "user.graphql").read_text()
        assert "author" not in content
        assert "Circular reference" not in content

    def test_field_filters(self, runner, workdir):
        result = runner.invoke(main, [
            "generate", "-s", "schema.graphql", "-o", "ops",
            "--include-fields", "user,createUser",
        ])

        assert result.exit_code == 0, result.output
        written = sorted(p.name for p in (workdir / "ops").rglob("*.graphql"))
        assert written == ["createUser.graphql", "user.graphql"]

    def test_config_file(self, runner, workdir):
        (workdir / "custom.json").write_text(json.dumps({
            "schema": "schema.graphql",
            "output": "from-config",
            "shallowMode": True,
        }))

        result = runner.invoke(main, ["generate", "-c", "custom.json", "-v"])

        assert result.exit_code == 0, result.output
        assert "Max depth: 1" in result.output
        content = (workdir / "from-config" / "query" / "user.graphql").read_text()
        assert "posts # Max depth (1) reached" in content

    def test_invalid_headers(self, runner, workdir):
        result = runner.invoke(main, ["generate", "-s", "schema.graphql", "-H", "{oops"])
        assert result.exit_code == 1
        assert "Invalid JSON format for headers" in result.output

    def test_missing_source(self, runner, workdir):
        result = runner.invoke(main, ["generate"])
        assert result.exit_code == 1
        assert "Either 'endpoint' or 'schema' must be provided" in result.output

    def test_out_of_range_option(self, runner, workdir):
        result = runner.invoke(main, ["generate", "-s", "schema.graphql", "--max-depth", "20"])
        assert result.exit_code == 1
        assert "Configuration validation failed: maxDepth" in result.output

    def test_unknown_circular_mode(self, runner, workdir):
        result = runner.invoke(main, ["generate", "-s", "schema.graphql", "--circular-refs", "never"])
        assert result.exit_code == 2


class TestInit:
    """Tests for the init command."""

    def test_creates_config(self, runner, workdir):
        result = runner.invoke(main, ["init"])

        assert result.exit_code == 0, result.output
        assert "Configuration file created" in result.output
        data = json.loads((workdir / "gqlopera.config.json").read_text())
        assert data["endpoint"] == "http://localhost:4000/graphql"

    def test_existing_config_is_kept(self, runner, workdir):
        (workdir / "gqlopera.config.json").write_text("{}")

        result = runner.invoke(main, ["init"])

        assert result.exit_code == 0
        assert "Configuration file already exists" in result.output
        assert (workdir / "gqlopera.config.json").read_text() == "{}"


class TestValidate:
    """Tests for the validate command."""

    def test_valid_schema(self, runner, workdir):
        result = runner.invoke(main, ["validate", "-s", "schema.graphql"])

        assert result.exit_code == 0, result.output
        assert "Validation successful!" in result.output
        assert "(5 query, 1 mutation, 1 subscription root fields)" in result.output

    def test_invalid_schema(self, runner, workdir):
        (workdir / "broken.graphql").write_text("type Query {")

        result = runner.invoke(main, ["validate", "-s", "broken.graphql"])

        assert result.exit_code == 1
        assert "Validation failed:" in result.output
