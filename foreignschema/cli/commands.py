"""Command line interface for foreignschema."""
import importlib
import json
import logging
from pathlib import Path
from typing import Any, Dict

import click
from colorama import Fore, Style

from .. import __version__
from ..api.foreign import resolve_optional, resolve_required
from ..config import app_config
from ..errors import ForeignSchemaError
from ..exporter.json_exporter import JsonExporter
from ..introspection.type_tracer import TypeTracer
from ..registry.type_registry import TypeRegistry
from ..schema.models import SchemaNode

logger = logging.getLogger(__name__)


def load_target(target: str) -> Any:
    """
    Import a type from a "package.module:Name" reference

    Nested attributes are allowed after the colon ("module:Outer.Inner").
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise click.BadParameter(f"Expected 'module:TypeName', got '{target}'")

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import module '{module_name}': {e}")

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError:
            raise click.BadParameter(f"'{attr_path}' not found in module '{module_name}'")
    return obj


def print_summary(roots: Dict[str, SchemaNode], registry: TypeRegistry) -> None:
    """Print a colored summary to stderr."""
    click.echo(f"{Fore.CYAN}{'━' * 45}", err=True)
    for label, schema in roots.items():
        kind = type(schema).__name__.replace("Schema", "")
        click.echo(f"{Fore.WHITE}{label}{Fore.CYAN} → {kind}", err=True)
    click.echo(
        f"{Fore.GREEN}✅ {len(roots)} schemas, {len(registry.definitions())} definitions"
        f"{Style.RESET_ALL}",
        err=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Logging level (default from FOREIGNSCHEMA_LOG_LEVEL)")
def cli(log_level):
    """Generate OpenAPI schemas for foreign Python types."""
    logging.basicConfig(
        level=(log_level or app_config.log_level).upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


@cli.command()
@click.argument("targets", nargs=-1)
@click.option(
    "--optional",
    "optional_targets",
    multiple=True,
    help="Type exposed as optional (nullable); may be repeated",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    help="Write the document to this file instead of stdout",
)
@click.option("--ref-prefix", default=None, help="Prefix of every $ref")
@click.option(
    "--qualified-names",
    is_flag=True,
    default=False,
    help="Name definitions module.QualName",
)
def export(targets, optional_targets, output, ref_prefix, qualified_names):
    """Resolve TARGETS (module:TypeName) and print the schema document."""
    if not targets and not optional_targets:
        raise click.UsageError("Give at least one TARGET or --optional TARGET")

    ref_prefix = ref_prefix or app_config.ref_prefix
    tracer = TypeTracer(qualified_names=qualified_names or app_config.qualified_names)
    registry = TypeRegistry()
    roots: Dict[str, SchemaNode] = {}

    try:
        for target in targets:
            roots[target] = resolve_required(load_target(target), registry, tracer)
        for target in optional_targets:
            roots[f"{target}?"] = resolve_optional(load_target(target), registry, tracer)
    except ForeignSchemaError as e:
        raise click.ClickException(str(e))

    exporter = JsonExporter()
    if output:
        exporter.export(Path(output), registry, roots, ref_prefix)
        click.echo(f"{Fore.GREEN}Saved to {output}{Style.RESET_ALL}", err=True)
    else:
        document = exporter.build_document(registry, roots, ref_prefix)
        click.echo(json.dumps(document, indent=2))

    print_summary(roots, registry)


@cli.command()
@click.argument("target")
@click.option("--qualified-names", is_flag=True, default=False)
def trace(target, qualified_names):
    """Print the structural trace of TARGET (module:TypeName)."""
    tracer = TypeTracer(qualified_names=qualified_names or app_config.qualified_names)
    try:
        node = tracer.trace(load_target(target))
    except ForeignSchemaError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(node.to_dict(), indent=2))
