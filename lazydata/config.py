"""Export options loading from YAML."""

# Module responsibilities:
# - Parse YAML option files into ExportOptions with strict key validation.
# - Surface ConfigError for structural problems instead of silently ignoring keys.

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError
from .schema import ExportConfig, ExportOptions, PdfConfig, PdfOptions
from .utils.log import get_logger

logger = get_logger("config")

_TOP_LEVEL_KEYS = set(ExportConfig.__annotations__)
_PDF_KEYS = set(PdfConfig.__annotations__)
_PDF_BOOL_KEYS = {"apply_page_size"}


def _pdf_options(payload: Any) -> PdfOptions:
    if payload is None:
        return PdfOptions()
    if not isinstance(payload, dict):
        raise ConfigError("Invalid 'pdf' section (expected mapping)")
    if unknown := set(payload) - _PDF_KEYS:
        raise ConfigError(f"Unknown pdf option keys: {', '.join(sorted(map(str, unknown)))}")

    values: dict[str, Any] = {}
    for key, value in payload.items():
        if key in _PDF_BOOL_KEYS:
            values[key] = bool(value)
            continue
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"pdf.{key} must be a number, got {value!r}") from exc
        if number < 0:
            raise ConfigError(f"pdf.{key} must not be negative")
        values[key] = number
    return PdfOptions(**values)


def options_from_mapping(payload: Mapping[str, Any]) -> ExportOptions:
    """Build ExportOptions from an already-parsed mapping."""

    if unknown := set(payload) - _TOP_LEVEL_KEYS:
        raise ConfigError(f"Unknown option keys: {', '.join(sorted(map(str, unknown)))}")
    title = payload.get("title")
    return ExportOptions(
        title=str(title) if title else None,
        include_header=bool(payload.get("include_header", True)),
        pdf=_pdf_options(payload.get("pdf")),
    )


def load_options(path: Path) -> ExportOptions:
    """Load export options from a YAML file.

    Raises:
        FileNotFoundError: When the file does not exist.
        ConfigError: When the YAML is not a mapping or holds unknown keys.
    """

    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        payload = yaml.safe_load(fh)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ConfigError("Invalid options YAML structure (expected mapping)")
    options = options_from_mapping(payload)
    logger.info("Export options loaded", extra={"path": str(path), "keys": sorted(payload)})
    return options
