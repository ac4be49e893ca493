import json
import logging

import click

from .config import LANGUAGES, CodeGeneratorConfig, OutputMode
from .errors import CodeGenerationError
from .generator import SchemaGenerator


@click.command()
@click.option("--file", "-f", "path", required=True, type=click.Path(exists=True, dir_okay=False, resolve_path=True), help="Path of the OpenAPI spec")
@click.option("--output", "-o", required=True, type=click.Path(file_okay=False, resolve_path=True), help="Output directory")
@click.option("--language", "-l", default=None, type=click.Choice(LANGUAGES), help="Target language (default: python)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--prefix", default=None, type=str, help="Definition name prefix stripped from output paths")
@click.option("--force/--no-force", default=True, help="Overwrite existing output files")
@click.option("--format", "format_code", is_flag=True, default=False, help="Format generated Python code with black")
@click.option("--verbose", "-v", is_flag=True, default=False)
def k8s_schema_to_code(path, output, language, config, prefix, force, format_code, verbose):
    """Generate one module per definition of an OpenAPI/Kubernetes spec."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        if config is not None:
            with open(config) as f:
                config = CodeGeneratorConfig.from_dict(json.load(f))
        else:
            config = CodeGeneratorConfig()

        # CLI flags override the config file
        if language is not None:
            config.language = language
        if prefix is not None:
            config.definition_prefix = prefix
        if not force:
            config.output.mode = OutputMode.ERROR_IF_EXISTS
        if format_code:
            config.formatter.enabled = True

        with open(path, encoding="utf-8") as f:
            document = json.load(f)

        generator = SchemaGenerator(document, config)
        generator.write(output, report=lambda target: click.echo(f"Generating: {target}"))
    except (CodeGenerationError, json.JSONDecodeError, OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e
