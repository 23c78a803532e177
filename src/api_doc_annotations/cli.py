"""CLI entry point for api-doc-annotations."""

import fnmatch
import json
import logging
from pathlib import Path

import click
import yaml

from api_doc_annotations.errors import ApiDocError
from api_doc_annotations.generator.snippets import SUPPORTED_LANGUAGES, SnippetGenerator
from api_doc_annotations.generator.validator import validate_python
from api_doc_annotations.parser.base import EndpointDocument
from api_doc_annotations.parser.docblock import enrich_endpoints
from api_doc_annotations.parser.routes import load_routes

DEFAULT_BASE_URL = "http://localhost:8080"


def _filter_endpoints(endpoints: list[EndpointDocument], patterns: tuple[str, ...]) -> list[EndpointDocument]:
    """Keep endpoints matching any 'METHOD /path' or '/path' glob pattern."""
    if not patterns:
        return endpoints
    result = []
    for ep in endpoints:
        for pattern in patterns:
            method, _, path = pattern.strip().rpartition(" ")
            if method and method.upper() != ep.http_method:
                continue
            if fnmatch.fnmatchcase(ep.uri, path):
                result.append(ep)
                break
    return result


def _load(routes_path: Path, endpoint_filters: tuple[str, ...]) -> list[EndpointDocument]:
    try:
        endpoints = load_routes(routes_path)
    except ApiDocError as e:
        raise click.ClickException(str(e)) from e
    endpoints = _filter_endpoints(endpoints, endpoint_filters)
    click.echo(f"Found {len(endpoints)} endpoints.", err=True)
    return enrich_endpoints(endpoints)


def _write_or_echo(content: str, output: Path | None) -> None:
    if output is None:
        click.echo(content)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    click.echo(f"Saved to {output}", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log skipped annotations and routes.")
def main(verbose: bool):
    """API Doc Annotations — parse endpoint annotations and render client snippets."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


endpoint_option = click.option(
    "--endpoint", "endpoint_filters", multiple=True,
    help="Only include matching endpoints, e.g. 'POST /users' or '/users/*'. Repeatable.",
)


@main.command()
@click.argument("routes_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file (default: stdout).")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
@endpoint_option
def parse(routes_path: Path, output: Path | None, fmt: str, endpoint_filters: tuple[str, ...]):
    """Parse annotations for every route and output the documentation set."""
    endpoints = _load(routes_path, endpoint_filters)
    docs = [ep.to_dict() for ep in endpoints]

    if fmt == "yaml":
        content = yaml.safe_dump(docs, sort_keys=False, allow_unicode=True)
    else:
        content = json.dumps(docs, indent=2, ensure_ascii=False)
    _write_or_echo(content, output)


@main.command()
@click.argument("routes_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-l", "--language", default="curl",
    type=click.Choice([*SUPPORTED_LANGUAGES, "all"]), help="Target client language.",
)
@click.option("--base-url", envvar="API_BASE_URL", default=DEFAULT_BASE_URL, show_default=True, help="Base URL of the API.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output Markdown file (default: stdout).")
@endpoint_option
def snippet(routes_path: Path, language: str, base_url: str, output: Path | None, endpoint_filters: tuple[str, ...]):
    """Render example request code for every route."""
    endpoints = _load(routes_path, endpoint_filters)
    languages = SUPPORTED_LANGUAGES if language == "all" else (language,)

    gen = SnippetGenerator()
    sections = []
    python_snippets = {}
    for ep in endpoints:
        snippets = gen.generate_all(ep, base_url, languages)
        blocks = [f"## {ep.http_method} {ep.uri}"]
        if ep.is_deprecated:
            blocks.append(f"> Deprecated: {ep.deprecation_message}")
        for lang, code in snippets.items():
            blocks.append(f"```{_fence_language(lang)}\n{code}\n```")
        sections.append("\n\n".join(blocks))
        if "python" in snippets:
            python_snippets[f"{ep.http_method} {ep.uri}"] = snippets["python"]

    for label, err in validate_python(python_snippets).items():
        click.echo(f"  Warning: generated Python for {label} is invalid: {err}", err=True)

    _write_or_echo("\n\n".join(sections) + "\n", output)


def _fence_language(language: str) -> str:
    return "bash" if language == "curl" else language
