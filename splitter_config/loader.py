"""
Configuration Loader (``splitter_config.loader``).

Responsibility
--------------
Loads YAML configuration set files and parses them into typed
``splitter_config.schema`` dataclass instances.  Runtime callers go
through ``splitter_config.get_active_config()`` instead of calling this
module directly.

Invariants enforced
-------------------
* Required keys have no silent defaults: a missing ``name``, ``version``,
  ``ledger.ledger_code`` or ``ledger.owner`` raises ``KeyError``.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the source
  document.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Wrongly typed values  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from splitter_config.schema import (
    DatabaseDef,
    LedgerDef,
    LoggingDef,
    PolicyDef,
    SplitterConfig,
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(f"{key} must be true or false, got {value!r}")


def _parse_int(value: Any, key: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ValueError(f"{key} must be an integer, got {value!r}")


def parse_policy(data: dict[str, Any]) -> PolicyDef:
    """Parse a PolicyDef; absent keys take the ledger defaults."""
    defaults = PolicyDef()
    return PolicyDef(
        require_participant_caller=_parse_bool(
            data.get("require_participant_caller", defaults.require_participant_caller),
            "policy.require_participant_caller",
        ),
        min_participants=_parse_int(
            data.get("min_participants", defaults.min_participants),
            "policy.min_participants",
        ),
        pause_blocks_withdrawals=_parse_bool(
            data.get("pause_blocks_withdrawals", defaults.pause_blocks_withdrawals),
            "policy.pause_blocks_withdrawals",
        ),
    )


def parse_ledger(data: dict[str, Any]) -> LedgerDef:
    """
    Parse a LedgerDef.

    Raises:
        KeyError: if ``ledger_code`` or ``owner`` is missing.
    """
    participants = data.get("initial_participants") or []
    if not isinstance(participants, list):
        raise ValueError("ledger.initial_participants must be a list")
    return LedgerDef(
        ledger_code=str(data["ledger_code"]),
        owner=str(data["owner"]),
        initial_participants=tuple(str(p) for p in participants),
    )


def parse_database(data: dict[str, Any]) -> DatabaseDef:
    defaults = DatabaseDef()
    return DatabaseDef(
        url=str(data.get("url", defaults.url)),
        echo=_parse_bool(data.get("echo", defaults.echo), "database.echo"),
        pool_size=_parse_int(data.get("pool_size", defaults.pool_size), "database.pool_size"),
    )


def parse_logging(data: dict[str, Any]) -> LoggingDef:
    return LoggingDef(level=str(data.get("level", LoggingDef().level)).upper())


def parse_config(data: dict[str, Any]) -> SplitterConfig:
    """
    Parse a whole configuration set document.

    The checksum is computed over ``data`` as given, before defaults are
    applied.
    """
    return SplitterConfig(
        name=str(data["name"]),
        version=_parse_int(data["version"], "version"),
        ledger=parse_ledger(data["ledger"]),
        policy=parse_policy(data.get("policy") or {}),
        database=parse_database(data.get("database") or {}),
        logging=parse_logging(data.get("logging") or {}),
        description=str(data.get("description", "")),
        checksum=compute_checksum(data),
    )


def load_config_file(path: Path) -> SplitterConfig:
    return parse_config(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums, regardless of
    key order in the source file.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
