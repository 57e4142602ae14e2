"""
Config -> Kernel Bridges.

Functions that convert a ``SplitterConfig`` into kernel inputs.  These
live in splitter_config (the producer) because the kernel must NEVER
import splitter_config.

Usage:
    from splitter_config.bridges import build_ledger_policy, build_owner

    config = get_active_config("default")
    service = SplitterService.open_ledger(
        session,
        config.ledger.ledger_code,
        build_owner(config),
        policy=build_ledger_policy(config),
        initial_participants=build_initial_participants(config),
    )
"""

from __future__ import annotations

from splitter_config.schema import SplitterConfig
from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.policy import LedgerPolicy


def build_ledger_policy(config: SplitterConfig) -> LedgerPolicy:
    return LedgerPolicy(
        require_participant_caller=config.policy.require_participant_caller,
        min_participants=config.policy.min_participants,
        pause_blocks_withdrawals=config.policy.pause_blocks_withdrawals,
    )


def build_owner(config: SplitterConfig) -> Address:
    return Address.parse(config.ledger.owner)


def build_initial_participants(config: SplitterConfig) -> tuple[Address, ...]:
    """Initial participants in configuration order."""
    return tuple(Address.parse(p) for p in config.ledger.initial_participants)
