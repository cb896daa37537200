"""Result formatters for CLI output.

- text: Human-readable one-line summary
- json: Machine-readable format
"""

import json
from typing import Any

from ..model.element import Region


def format_result(
    result: Region | None,
    details: dict[str, Any],
    format_type: str,
) -> str:
    """Format a template search result.

    Args:
        result: Found region or None
        details: Search parameters to echo back (source, template, threshold, ...)
        format_type: Output format ("text" or "json")

    Returns:
        Formatted string output

    Raises:
        ValueError: If format_type is not recognized
    """
    if format_type == "json":
        return _format_json(result, details)
    elif format_type == "text":
        return _format_text(result, details)
    else:
        raise ValueError(f"Unknown format type: {format_type}")


def _format_json(result: Region | None, details: dict[str, Any]) -> str:
    output = {
        "found": result is not None,
        "region": result.to_dict() if result else None,
        **details,
    }
    return json.dumps(output, indent=2)


def _format_text(result: Region | None, details: dict[str, Any]) -> str:
    template = details.get("template", "template")
    if result is None:
        return f"{template}: not found"
    return f"{template}: found at x={result.x} y={result.y} width={result.width} height={result.height}"
