#!/usr/bin/env python3
"""Kubebench CLI - compile benchmark definitions into Kubernetes manifests."""

import sys

import click
import yaml

from kubebench.builders.registry import (
    KindRegistry,
    KindRegistryError,
    default_registry,
)
from kubebench.compiler import compile_definition, load_definitions
from kubebench.errors import CompileError
from kubebench.models.definition_models import document_name
from kubebench.models.settings import CompilerSettings
from kubebench.utils.env import get_env
from kubebench.utils.logger import Logger


def _registry() -> KindRegistry:
    return default_registry(CompilerSettings.from_env())


def _load(path: str) -> list[dict]:
    try:
        return load_definitions(path)
    except (CompileError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Error: Failed to read {path}: {e}", err=True)
        sys.exit(1)


@click.group()
def kubebench():
    """Compile declarative benchmark definitions into Kubernetes workloads."""
    if not Logger.is_configured():
        Logger.configure(
            level=get_env("KUBEBENCH_LOG_LEVEL", default="WARNING"), timestamps=True
        )


@kubebench.command()
def kinds():
    """List the benchmark kinds that can be compiled."""
    for summary in _registry().list_kinds():
        click.echo(
            f"{summary['name']:<10} {summary['shape']:<14} {summary['description']}"
        )


@kubebench.command()
@click.argument("definition_file", type=click.Path(exists=True, dir_okay=False))
def validate(definition_file):
    """Check that every definition in DEFINITION_FILE compiles."""
    registry = _registry()
    failures = 0
    for document in _load(definition_file):
        try:
            compiled = compile_definition(document, registry)
        except (CompileError, KindRegistryError) as e:
            failures += 1
            click.echo(f"FAIL {document.get('kind')}/{document_name(document)}: {e}")
            continue
        click.echo(
            f"OK   {compiled.kind}/{compiled.name} "
            f"({len(compiled.objects)} objects)"
        )
    if failures:
        sys.exit(1)


@kubebench.command()
@click.argument("definition_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Write manifests to this file instead of stdout",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def render(definition_file, output, debug):
    """Render the workload manifests for DEFINITION_FILE as YAML."""
    if debug:
        Logger.set_level("DEBUG")

    registry = _registry()
    manifests = []
    for document in _load(definition_file):
        try:
            manifests.extend(compile_definition(document, registry).to_manifests())
        except (CompileError, KindRegistryError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    rendered = yaml.safe_dump_all(manifests, sort_keys=False)
    if output:
        with open(output, "w") as f:
            f.write(rendered)
        Logger.get("cli").info(f"Wrote {len(manifests)} manifests to {output}")
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    kubebench()
