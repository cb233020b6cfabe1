"""Reading and validating JSON job files.

Every failure is raised as a ConfigError whose ``error_type`` tells the CLI
and the REST layer how to present it. Pydantic errors are flattened into
path/message/value records so they can be shown next to the offending field.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from slabcut.application.config.schema import JobConfiguration


class ConfigError(Exception):
    """A job file could not be read, parsed or validated.

    Attributes:
        message: Summary suitable for a single log line.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse or validation.
        path: Job file the error came from, when loading from disk.
        details: Per-problem records. JSON errors carry line/column,
            schema errors carry path/message/value.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = list(details) if details else []

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location the way it reads in the job file.

    Examples:
        >>> _format_json_path(("slab", "width"))
        'slab.width'
        >>> _format_json_path(("pieces", 0, "length"))
        'pieces[0].length'
    """
    rendered = ""
    for item in loc:
        if isinstance(item, int):
            rendered += f"[{item}]"
        elif rendered:
            rendered += f".{item}"
        else:
            rendered = str(item)
    return rendered


def _schema_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(issue["loc"]),
            "message": issue["msg"],
            "value": issue.get("input"),
            "error_type": issue["type"],
        }
        for issue in error.errors()
    ]


def _schema_summary(details: list[dict[str, Any]]) -> str:
    lines = [f"Job validation failed ({len(details)} problem(s)):"]
    for record in details:
        value = record.get("value")
        suffix = ""
        if value is not None and not isinstance(value, (dict, list)):
            suffix = f" (got: {value!r})"
        lines.append(f"  - {record['path']}: {record['message']}{suffix}")
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> JobConfiguration:
    try:
        return JobConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _schema_details(e)
        raise ConfigError(
            _schema_summary(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def _read_job_text(path: Path) -> str:
    if not path.is_file():
        raise ConfigError(
            f"Job file not found: {path}", error_type="file_not_found", path=path
        )
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            f"Permission denied reading job file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Could not read job file {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e


def load_config(path: Path) -> JobConfiguration:
    """Load a job file from disk and validate it.

    Args:
        path: Location of the JSON job file.

    Returns:
        The validated JobConfiguration.

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid
            JSON, or does not match the job schema. Check ``error_type``
            to tell these apart.
    """
    text = _read_job_text(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e
    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> JobConfiguration:
    """Validate an already-parsed job, as received by the REST API.

    Raises:
        ConfigError: With error_type "validation" if the data does not
            match the job schema.
    """
    return _validate(data)
