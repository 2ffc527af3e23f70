"""
Write the OpenAPI schema of the Todo service to a JSON file.

The schema is produced from the same application factory the server uses, so
API clients and documentation tools can consume a stable document without
running the service. No store is opened.

Usage:
    python -m todo_service.generate_openapi [output_path]

The default output path is ``interfaces/openapi.json`` under the current
working directory.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .main import create_app, openapi_tags
from .repositories import InMemoryStore

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("interfaces") / "openapi.json"


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Make sure every tag in ``openapi_tags`` is present in the schema without
    overriding tags that are already defined.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


# PUBLIC_INTERFACE
def generate_openapi(output: Optional[Union[str, Path]] = None) -> Path:
    """Generate the OpenAPI schema file and return the written file path."""
    schema = create_app(store=InMemoryStore()).openapi()
    _ensure_tags(schema)

    out_path = Path(output) if output is not None else DEFAULT_OUTPUT
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    logger.info("Wrote OpenAPI schema to %s", out_path)
    return out_path


def main() -> None:
    out = generate_openapi(sys.argv[1] if len(sys.argv) > 1 else None)
    print(f"Wrote OpenAPI schema to: {out}")


if __name__ == "__main__":
    main()
