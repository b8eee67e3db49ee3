"""
Tests for the command-line interface, run against shared in-memory storage.
"""

import json

import pytest
from click.testing import CliRunner

from slotted_context import cli as cli_module
from slotted_context.cli import cli
from slotted_context.config.dependencies import Dependencies
from slotted_context.config.settings import Settings
from slotted_context.storage.memory import InMemoryStorage
from slotted_context.store.context_store import ContextStore


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep the CLI from reconfiguring logging onto the runner's streams"""
    monkeypatch.setattr(cli_module, "configure_from_settings", lambda app_settings=None: None)


@pytest.fixture
def cli_storage(monkeypatch):
    """Every CLI invocation gets a fresh store over the same storage"""
    shared = InMemoryStorage()
    app_settings = Settings(storage_backend="memory")

    def fake_dependencies(app_settings_override=None):
        return Dependencies(settings=app_settings, storage=shared, store=ContextStore(shared))

    monkeypatch.setattr(cli_module, "create_dependencies", fake_dependencies)
    return shared


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, *args, **kwargs):
    return runner.invoke(cli, list(args), **kwargs)


def test_show_without_context_fails(runner, cli_storage):
    result = invoke(runner, "show")

    assert result.exit_code == 1
    assert "onboarding not yet started" in result.output


def test_init_then_show(runner, cli_storage):
    result = invoke(runner, "init", "--name", "Acme Corp", "--industry", "SaaS", "--cadence", "monthly")
    assert result.exit_code == 0
    assert "✓ Context created for Acme Corp" in result.output

    result = invoke(runner, "show")
    assert result.exit_code == 0
    snapshot = json.loads(result.stdout)
    assert snapshot["company"]["name"] == "Acme Corp"
    assert snapshot["marketingGoals"]["cadence"] == "monthly"
    assert snapshot["metadata"]["mcpCompatible"] is True


def test_init_refuses_to_overwrite_without_force(runner, cli_storage):
    invoke(runner, "init", "--name", "Acme Corp")

    result = invoke(runner, "init", "--name", "Other Co")
    assert result.exit_code == 1
    assert "--force" in result.output

    result = invoke(runner, "init", "--name", "Other Co", "--force")
    assert result.exit_code == 0
    assert "Other Co" in invoke(runner, "show").stdout


def test_prompt_renders_context(runner, cli_storage):
    invoke(runner, "init", "--name", "Acme Corp", "--industry", "SaaS")

    result = invoke(runner, "prompt")

    assert result.exit_code == 0
    assert "Company: Acme Corp - SaaS" in result.stdout
    assert "Content Cadence: weekly" in result.stdout


def test_set_updates_single_field(runner, cli_storage):
    invoke(runner, "init", "--name", "Acme Corp")

    result = invoke(runner, "set", "marketingGoals.channels.primary", "LinkedIn, Email", "--list")
    assert result.exit_code == 0
    assert "✓ Updated marketingGoals.channels.primary" in result.output

    snapshot = json.loads(invoke(runner, "show").stdout)
    assert snapshot["marketingGoals"]["channels"]["primary"] == ["LinkedIn", "Email"]
    assert snapshot["company"]["name"] == "Acme Corp"


def test_set_rejects_invalid_value(runner, cli_storage):
    invoke(runner, "init", "--name", "Acme Corp")

    result = invoke(runner, "set", "marketingGoals.cadence", "hourly")

    assert result.exit_code == 1
    assert "cannot set marketingGoals.cadence" in result.output
    assert json.loads(invoke(runner, "show").stdout)["marketingGoals"]["cadence"] == "weekly"


def test_export_then_import(runner, cli_storage, tmp_path):
    invoke(runner, "init", "--name", "Acme Corp")
    path = tmp_path / "context.json"

    result = invoke(runner, "export", "-o", str(path))
    assert result.exit_code == 0
    exported = json.loads(path.read_text(encoding="utf-8"))

    invoke(runner, "clear", "--yes")
    exported["company"]["name"] = "Imported Co"
    result = invoke(runner, "import", "-", input=json.dumps(exported))

    assert result.exit_code == 0
    assert "✓ Context imported for Imported Co" in result.output


def test_import_rejects_malformed_snapshot(runner, cli_storage):
    result = invoke(runner, "import", "-", input="{not json")

    assert result.exit_code == 1
    assert "invalid context" in result.output


def test_import_replaces_corrupt_stored_context(runner, cli_storage, acme_document):
    cli_storage._values["slotted_context"] = "garbage"

    assert invoke(runner, "show").exit_code == 1

    result = invoke(runner, "import", "-", input=acme_document.model_dump_json(by_alias=True))
    assert result.exit_code == 0
    assert invoke(runner, "show").exit_code == 0


def test_resources_lists_uris(runner, cli_storage):
    invoke(runner, "init", "--name", "Acme Corp")

    result = invoke(runner, "resources")

    assert result.exit_code == 0
    assert "company://profile" in result.stdout
    assert "company://ai-persona" in result.stdout


def test_clear_removes_context(runner, cli_storage):
    invoke(runner, "init", "--name", "Acme Corp")

    result = invoke(runner, "clear", "--yes")

    assert result.exit_code == 0
    assert "Context cleared" in result.output
    assert invoke(runner, "show").exit_code == 1


def test_config_shows_backend(runner):
    result = invoke(runner, "config")

    assert result.exit_code == 0
    assert "Storage Backend:" in result.output
