"""
SplitterConfig schema.

Defines the human-authored, reviewable configuration for one splitter
ledger deployment.  YAML configuration sets are parsed into these types by
the loader, checked by the validator, and translated into kernel inputs by
the bridges.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Ledger policy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PolicyDef:
    """Authorization and gating switches for a ledger."""

    require_participant_caller: bool = True
    min_participants: int = 0
    pause_blocks_withdrawals: bool = True


# ---------------------------------------------------------------------------
# Ledger definition
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LedgerDef:
    """The ledger to open: its code, administrator and first participants."""

    ledger_code: str
    owner: str
    initial_participants: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Runtime
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatabaseDef:
    url: str = "sqlite:///:memory:"
    echo: bool = False
    pool_size: int = 5


@dataclass(frozen=True)
class LoggingDef:
    level: str = "INFO"


# ---------------------------------------------------------------------------
# Top-level configuration set
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SplitterConfig:
    """
    One configuration set.

    ``checksum`` is the SHA-256 of the source document and identifies the
    exact configuration a ledger was opened with.
    """

    name: str
    version: int
    ledger: LedgerDef
    policy: PolicyDef = field(default_factory=PolicyDef)
    database: DatabaseDef = field(default_factory=DatabaseDef)
    logging: LoggingDef = field(default_factory=LoggingDef)
    description: str = ""
    checksum: str = ""
