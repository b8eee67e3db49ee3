#!/usr/bin/env python
"""Command-line interface for the Slotted context store."""

import asyncio
import click
import json
import sys
from functools import wraps

from pydantic import ValidationError

from slotted_context.config.dependencies import create_dependencies
from slotted_context.config.settings import settings
from slotted_context.errors import ContextStoreError, FormatError, NoDocumentError, StorageError
from slotted_context.utils.document_utils import changes_from_path, revise_document, split_list_value
from slotted_context.utils.logging import configure_from_settings, get_logger

logger = get_logger(__name__)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def store_command(func=None, *, tolerate_corrupt: bool = False):
    """Run an async command body against an initialized store, mapping store errors to exit code 1.

    Commands that overwrite the stored context pass ``tolerate_corrupt=True`` so
    a corrupt snapshot can still be replaced or cleared.
    """
    if func is None:
        return lambda f: store_command(f, tolerate_corrupt=tolerate_corrupt)

    @wraps(func)
    def wrapper(*args, **kwargs):
        async def run():
            store = create_dependencies().store
            try:
                try:
                    await store.init()
                except FormatError as e:
                    if not tolerate_corrupt:
                        raise
                    logger.warning("Ignoring corrupt stored context", extra={"error_message": str(e)})
                return await func(store, *args, **kwargs)
            finally:
                await store.dispose()

        try:
            return asyncio.run(run())
        except NoDocumentError:
            _fail("onboarding not yet started; run 'slotted-context init' or 'slotted-context import'")
        except FormatError as e:
            _fail(f"invalid context: {e}")
        except StorageError as e:
            _fail(f"storage unavailable, please retry: {e}")
        except ContextStoreError as e:
            _fail(str(e))
    return wrapper


@click.group()
def cli():
    """Slotted - company brand and marketing context store."""
    configure_from_settings(settings)


@cli.command()
@click.option("--name", required=True, help="Company name")
@click.option("--industry", default="", help="Company industry")
@click.option("--size", type=click.Choice(["startup", "small", "medium", "enterprise"]), help="Company size")
@click.option("--description", default="", help="Short company description")
@click.option("--website", default=None, help="Company website URL")
@click.option("--cadence", type=click.Choice(["daily", "weekly", "bi-weekly", "monthly"]), help="Content cadence")
@click.option("--force", is_flag=True, help="Replace an existing context")
@store_command(tolerate_corrupt=True)
async def init(store, name, industry, size, description, website, cadence, force):
    """Create and save a new context from basic company facts."""
    if store.has_document() and not force:
        _fail("a context already exists; pass --force to replace it")

    partial = {
        "company": {
            "name": name,
            "industry": industry,
            "size": size,
            "description": description,
            "website": website,
        }
    }
    if cadence:
        partial["marketingGoals"] = {"cadence": cadence}

    document = await store.save(store.create_initial_document(partial))
    click.echo(f"✓ Context created for {document.company.name}")
    click.echo(f"  Created: {document.metadata.created_at.isoformat()}")


@cli.command()
@store_command
async def show(store):
    """Print the current context as JSON."""
    click.echo(store.export_snapshot())


@cli.command()
@store_command
async def prompt(store):
    """Print the flattened prompt context used for AI generation."""
    click.echo(store.get_prompt_context())


@cli.command(name="export")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), help="Write the snapshot to a .json file")
@store_command
async def export_(store, output):
    """Export the current context snapshot."""
    snapshot = store.export_snapshot()
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(snapshot)
        click.echo(f"Context exported to: {output}")
    else:
        click.echo(snapshot)


@cli.command(name="import")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@store_command(tolerate_corrupt=True)
async def import_(store, source):
    """Replace the current context with a snapshot file (use - for stdin)."""
    document = await store.import_snapshot(source.read())
    click.echo(f"✓ Context imported for {document.company.name}")


@cli.command(name="set")
@click.argument("path")
@click.argument("value")
@click.option("--list", "as_list", is_flag=True, help="Treat VALUE as a comma separated list")
@click.option("--json", "as_json", is_flag=True, help="Parse VALUE as JSON")
@store_command
async def set_(store, path, value, as_list, as_json):
    """
    Change one field, e.g. `set marketingGoals.cadence monthly`.

    PATH uses snapshot field names (camelCase, brandDNA for the brand section).
    """
    current = store.get_current()
    if current is None:
        raise NoDocumentError("No context to update")

    if as_json:
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as e:
            _fail(f"VALUE is not valid JSON: {e}")
    elif as_list:
        parsed = split_list_value(value)
    else:
        parsed = value

    try:
        revised = revise_document(current, changes_from_path(path, parsed))
    except (ValueError, ValidationError) as e:
        _fail(f"cannot set {path}: {e}")

    await store.save(revised)
    click.echo(f"✓ Updated {path}")


@cli.command()
@store_command
async def resources(store):
    """List the context resources published to AI tooling."""
    items = store.get_resources()
    if not items:
        raise NoDocumentError("No context resources available")
    for resource in items:
        click.echo(f"{resource.uri}  {resource.name} - {resource.description}")


@cli.command()
@click.confirmation_option(prompt="Remove the stored context?")
@store_command(tolerate_corrupt=True)
async def clear(store):
    """Delete the stored context."""
    await store.clear()
    click.echo("Context cleared")


@cli.command()
def config():
    """Show current configuration settings."""
    click.echo("Slotted Context Configuration:")
    click.echo(f"  Storage Backend: {settings.storage_backend}")
    click.echo(f"  Storage Key: {settings.storage_key}")
    if settings.storage_backend == "file":
        click.echo(f"  Storage Path: {settings.storage_path}")
    if settings.storage_backend == "supabase":
        click.echo(f"  Supabase Table: {settings.supabase_table}")
        click.echo(f"  Supabase Configured: {settings.supabase_configured}")
    click.echo(f"  Max Retries: {settings.max_retries}")
    click.echo(f"  Log Level: {settings.log_level}")


if __name__ == "__main__":
    cli()
