"""
splitter_config -- single public entrypoint for ledger configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  No other component may read configuration
    files or environment variables directly.

Architecture position:
    Configuration -- YAML-driven, validated before use.  This package sits
    above ``splitter_kernel``.  The kernel MUST NEVER import from
    ``splitter_config``; ``bridges`` translates a configuration into
    kernel inputs.

Invariants enforced:
    - Single entrypoint: all runtime config flows through ``get_active_config()``.
    - Validation before use: a configuration with errors is never returned.
    - Deterministic checksum: the same YAML document always yields the same
      ``SplitterConfig.checksum``.

Failure modes:
    - ``FileNotFoundError`` -- no configuration set with the requested name.
    - ``ValueError`` -- parse or validation failures.
    - ``KeyError`` -- a required key is missing from the document.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``SPLITTER_CONFIG_TRACE`` log entry with the set name, version and
    checksum, tying each opened ledger to the configuration that governed it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path

from splitter_config.loader import load_config_file
from splitter_config.schema import SplitterConfig
from splitter_config.validator import validate_configuration

_logger = logging.getLogger("splitter_kernel.config")

# Default configuration sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"

DATABASE_URL_ENV = "SPLITTER_DATABASE_URL"


def get_active_config(
    set_name: str = "default",
    config_dir: Path | None = None,
) -> SplitterConfig:
    """The ONLY public configuration entrypoint.

    Loads ``<config_dir>/<set_name>.yaml``, validates it, and applies the
    ``SPLITTER_DATABASE_URL`` environment override when set.  The checksum
    always reflects the file, not the override.

    Args:
        set_name: Name of the configuration set (file stem).
        config_dir: Override path to the configuration sets directory.
            Defaults to splitter_config/sets/.

    Raises:
        FileNotFoundError: If no configuration set has that name.
        ValueError: If parsing or validation fails.
    """
    sets_dir = Path(config_dir) if config_dir is not None else _DEFAULT_CONFIG_DIR
    path = sets_dir / f"{set_name}.yaml"
    if not path.is_file():
        raise FileNotFoundError(f"No configuration set '{set_name}' in {sets_dir}")

    config = load_config_file(path)

    validation = validate_configuration(config)
    if not validation.is_valid:
        raise ValueError(
            "Configuration validation failed:\n"
            + "\n".join(f"  - {e}" for e in validation.errors)
        )
    for warning in validation.warnings:
        _logger.warning("config_validation_warning", extra={"warning": warning})

    url_override = os.environ.get(DATABASE_URL_ENV)
    if url_override:
        config = replace(config, database=replace(config.database, url=url_override))

    _logger.info(
        "SPLITTER_CONFIG_TRACE",
        extra={
            "trace_type": "SPLITTER_CONFIG_TRACE",
            "config_set": config.name,
            "config_version": config.version,
            "checksum": config.checksum,
            "ledger_code": config.ledger.ledger_code,
            "database_url_overridden": bool(url_override),
        },
    )
    return config


def available_config_sets(config_dir: Path | None = None) -> list[str]:
    """Names of the configuration sets in ``config_dir``."""
    sets_dir = Path(config_dir) if config_dir is not None else _DEFAULT_CONFIG_DIR
    if not sets_dir.is_dir():
        raise FileNotFoundError(f"Configuration sets directory not found: {sets_dir}")
    return sorted(p.stem for p in sets_dir.glob("*.yaml"))


__all__ = [
    "DATABASE_URL_ENV",
    "SplitterConfig",
    "available_config_sets",
    "get_active_config",
]
