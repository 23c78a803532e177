"""Snippet generator — renders endpoint documents into runnable client code."""

import json
import shlex

from api_doc_annotations.errors import UnsupportedLanguageError
from api_doc_annotations.generator.literals import to_php_literal, to_python_literal
from api_doc_annotations.parser.base import EndpointDocument

SUPPORTED_LANGUAGES = ("curl", "javascript", "php", "python")

BODY_METHODS = ("POST", "PUT", "PATCH")

# URIs are not rewritten, so a {token} path parameter looks like the placeholder.
TOKEN_PLACEHOLDER = "{token}"


def join_url(base_url: str, uri: str) -> str:
    """Join base URL and URI with exactly one slash between them."""
    return base_url.rstrip("/") + "/" + uri.lstrip("/")


def has_body(method: str) -> bool:
    return method.upper() in BODY_METHODS


def _example_body(doc: EndpointDocument) -> dict | None:
    """The first request example, when the method carries a body."""
    if not has_body(doc.http_method):
        return None
    example = doc.first_example()
    return example.value if example is not None else None


def _indent_tail(text: str, prefix: str) -> str:
    """Indent every line but the first."""
    first, _, rest = text.partition("\n")
    if not rest:
        return first
    return first + "\n" + "\n".join(prefix + line for line in rest.split("\n"))


class SnippetGenerator:
    """Generates example request code for an endpoint in several client languages."""

    def generate(self, doc: EndpointDocument, base_url: str, language: str) -> str:
        """Render the snippet for one language.

        Raises UnsupportedLanguageError for a language without a renderer.
        """
        key = language.strip().lower()
        if key not in SUPPORTED_LANGUAGES:
            raise UnsupportedLanguageError(language, SUPPORTED_LANGUAGES)
        return getattr(self, f"generate_{key}")(doc, base_url)

    def generate_all(
        self, doc: EndpointDocument, base_url: str, languages: tuple[str, ...] | list[str] | None = None
    ) -> dict[str, str]:
        """Render snippets for several languages. Returns {language: snippet}."""
        return {lang: self.generate(doc, base_url, lang) for lang in (languages or SUPPORTED_LANGUAGES)}

    def generate_curl(self, doc: EndpointDocument, base_url: str) -> str:
        method = doc.http_method.upper()
        url = join_url(base_url, doc.uri)

        lines = [
            f"curl -X {method} {shlex.quote(url)}",
            "  -H 'Content-Type: application/json'",
            "  -H 'Accept: application/json'",
        ]
        if doc.requires_auth:
            lines.append(f"  -H 'Authorization: Bearer {TOKEN_PLACEHOLDER}'")

        body = _example_body(doc)
        if body is not None:
            payload = json.dumps(body, indent=4, ensure_ascii=False)
            lines.append(f"  -d {shlex.quote(payload)}")

        return " \\\n".join(lines)

    def generate_javascript(self, doc: EndpointDocument, base_url: str) -> str:
        method = doc.http_method.upper()
        url = join_url(base_url, doc.uri)

        headers = [
            "    'Content-Type': 'application/json'",
            "    'Accept': 'application/json'",
        ]
        if doc.requires_auth:
            headers.append(f"    'Authorization': 'Bearer {TOKEN_PLACEHOLDER}'")

        options = [
            f"  method: '{method}'",
            "  headers: {\n" + ",\n".join(headers) + "\n  }",
        ]
        body = _example_body(doc)
        if body is not None:
            payload = _indent_tail(json.dumps(body, indent=2, ensure_ascii=False), "  ")
            options.append(f"  body: JSON.stringify({payload})")

        return (
            f"fetch({json.dumps(url)}, {{\n"
            + ",\n".join(options)
            + "\n})\n"
            + ".then(response => response.json())\n"
            + ".then(data => console.log(data))\n"
            + ".catch(error => console.error('Error:', error));"
        )

    def generate_php(self, doc: EndpointDocument, base_url: str) -> str:
        method = doc.http_method.lower()
        url = join_url(base_url, doc.uri)

        call = "$response = Http::"
        if doc.requires_auth:
            call += f"withToken('{TOKEN_PLACEHOLDER}')\n    ->"

        args = [to_php_literal(url)]
        body = _example_body(doc)
        if body is not None:
            args.append(to_php_literal(body))
        call += f"{method}({', '.join(args)});"

        return (
            "use Illuminate\\Support\\Facades\\Http;\n\n"
            f"{call}\n\n"
            "$data = $response->json();"
        )

    def generate_python(self, doc: EndpointDocument, base_url: str) -> str:
        method = doc.http_method.lower()
        url = join_url(base_url, doc.uri)

        headers = [
            "    'Content-Type': 'application/json',",
            "    'Accept': 'application/json',",
        ]
        if doc.requires_auth:
            headers.append(f"    'Authorization': 'Bearer {TOKEN_PLACEHOLDER}',")

        parts = [
            "import requests",
            "",
            f"url = {to_python_literal(url)}",
            "headers = {\n" + "\n".join(headers) + "\n}",
            "",
        ]
        body = _example_body(doc)
        if body is not None:
            parts.append(f"data = {to_python_literal(body)}")
            parts.append("")
            parts.append(f"response = requests.{method}(url, headers=headers, json=data)")
        else:
            parts.append(f"response = requests.{method}(url, headers=headers)")
        parts.append("print(response.json())")
        return "\n".join(parts)
