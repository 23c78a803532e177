"""Route file loader.

Reads the output of route introspection (YAML or JSON) into EndpointDocument
models. Each route entry needs ``uri`` and ``http_method`` (or ``httpMethod``);
``requires_auth`` and ``doc_block`` are optional::

    routes:
      - uri: /api/users
        http_method: POST
        requires_auth: true
        doc_block: |
          @LRDexample create {"name": "John"}
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from api_doc_annotations.errors import RouteFileError

from .base import EndpointDocument

logger = logging.getLogger(__name__)


def load_routes(file_path: Path) -> list[EndpointDocument]:
    """Load a route file into a list of EndpointDocument.

    Invalid entries are skipped with a warning; the rest still load.
    """
    try:
        text = file_path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as e:
        raise RouteFileError(f"Cannot read route file {file_path}: {e}") from e

    return parse_routes(data, source=str(file_path))


def parse_routes(data, source: str = "<routes>") -> list[EndpointDocument]:
    """Convert already-decoded route data into EndpointDocument models."""
    if isinstance(data, dict):
        data = data.get("routes")
    if not isinstance(data, list):
        raise RouteFileError(f"{source}: expected a list of routes or a 'routes' key")

    endpoints = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning(f"{source}: skipping route #{index}: not a mapping")
            continue
        try:
            endpoints.append(EndpointDocument.model_validate(item))
        except ValidationError as e:
            logger.warning(f"{source}: skipping route #{index}: {e.error_count()} validation error(s)")
    return endpoints
