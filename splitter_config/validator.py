"""
Configuration Validator (``splitter_config.validator``).

Responsibility
--------------
Validates a ``SplitterConfig`` before it is handed to the bridges, so a
ledger is never opened from a configuration the kernel would reject
halfway through.

Invariants enforced
-------------------
* Owner and participants are well-formed identities; the owner is not the
  zero identity.
* Initial participants are unique.
* ``min_participants`` is non-negative.
* The log level is a level the ``logging`` module knows.

Failure modes
-------------
* Validation errors (``ConfigValidationResult.errors``)  -> the
  configuration MUST NOT be used.
* Validation warnings  -> usable, but should be reviewed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from splitter_config.schema import SplitterConfig
from splitter_kernel.domain.identity import Address


@dataclass
class ConfigValidationResult:
    """
    Result of configuration validation.

    ``is_valid`` returns ``True`` only when ``errors`` is empty.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def _check_address(raw: str, label: str, result: ConfigValidationResult) -> Address | None:
    try:
        return Address.parse(raw)
    except ValueError:
        result.add_error(f"{label}: {raw!r} is not a valid identity")
        return None


def validate_configuration(config: SplitterConfig) -> ConfigValidationResult:
    """Validate a configuration set and collect every problem found."""
    result = ConfigValidationResult()

    if not config.ledger.ledger_code.strip():
        result.add_error("ledger.ledger_code must not be empty")

    owner = _check_address(config.ledger.owner, "ledger.owner", result)
    if owner is not None and owner.is_zero:
        result.add_error("ledger.owner must not be the zero identity")

    seen: set[Address] = set()
    for raw in config.ledger.initial_participants:
        participant = _check_address(raw, "ledger.initial_participants", result)
        if participant is None:
            continue
        if participant in seen:
            result.add_error(f"ledger.initial_participants: duplicate {participant}")
        seen.add(participant)
        if participant == owner:
            result.add_warning(
                f"ledger.initial_participants: owner {participant} is also a participant"
            )

    if config.policy.min_participants < 0:
        result.add_error("policy.min_participants must be >= 0")
    elif config.policy.min_participants > len(seen):
        result.add_warning(
            f"policy.min_participants={config.policy.min_participants} exceeds the "
            f"{len(seen)} initial participants; splits will fail until more are added"
        )

    if config.database.pool_size < 1:
        result.add_error("database.pool_size must be >= 1")

    if not isinstance(logging.getLevelName(config.logging.level), int):
        result.add_error(f"logging.level: unknown level {config.logging.level!r}")

    return result
