"""
LedgerPolicy -- the configurable knobs of a splitter ledger.

Configuration may influence *which* preconditions apply to a split or a
withdrawal, never whether the invariants in ``splitter_kernel.invariants``
hold.  Policies are built by ``splitter_config.bridges`` from a
configuration set; the kernel itself never reads configuration.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LedgerPolicy:
    """
    Per-ledger operating policy.

    Attributes:
        require_participant_caller: Only active participants may initiate
            a split.
        min_participants: Minimum registry size for a split to proceed.
            0 disables the check.
        pause_blocks_withdrawals: Withdrawals fail with HaltedError while
            the ledger is paused.
    """

    require_participant_caller: bool = True
    min_participants: int = 0
    pause_blocks_withdrawals: bool = True

    def __post_init__(self) -> None:
        if self.min_participants < 0:
            raise ValueError(
                f"min_participants must be >= 0, got {self.min_participants}"
            )


DEFAULT_POLICY = LedgerPolicy()
