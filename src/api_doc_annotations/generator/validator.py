"""Checks generated Python request snippets before they are written out."""

import ast

from api_doc_annotations.generator.snippets import BODY_METHODS


def validate_python(snippets: dict[str, str]) -> dict[str, str]:
    """Check Python snippets for syntax errors and a single ``requests`` call.

    Takes {label: source}, where the label is ``"METHOD /uri"``. The call must
    use the label's method, in lower case, and only body methods may pass
    ``json=``. Returns {label: error_message} for bad snippets.
    """
    errors = {}
    for label, content in snippets.items():
        if not content.strip():
            continue
        try:
            tree = ast.parse(content, filename=label)
        except SyntaxError as e:
            errors[label] = f"SyntaxError: {e.msg} (line {e.lineno})"
            continue
        problem = _check_request_call(tree, label.split(" ", 1)[0])
        if problem:
            errors[label] = problem
    return errors


def _check_request_call(tree: ast.AST, method: str) -> str | None:
    calls = [
        node for node in ast.walk(tree)
        if isinstance(node, ast.Call)
        and isinstance(node.func, ast.Attribute)
        and isinstance(node.func.value, ast.Name)
        and node.func.value.id == "requests"
    ]
    if len(calls) != 1:
        return f"expected one requests call, found {len(calls)}"

    call = calls[0]
    if call.func.attr != method.lower():
        return f"calls requests.{call.func.attr}, expected requests.{method.lower()}"
    sends_json = any(kw.arg == "json" for kw in call.keywords)
    if sends_json and method.upper() not in BODY_METHODS:
        return f"{method.upper()} request must not send a body"
    return None
