"""
Ledger Invariants Contract.

These invariants are structural law for every splitter ledger. No
``LedgerPolicy`` flag or configuration set may switch them off.

This module exists solely to declare them. Enforcement is distributed
across the domain operations (gates, registry, split, withdrawal),
``LedgerState.verify_solvency`` and the two hosts' atomic call wrappers.
"""

from enum import Enum, unique


@unique
class LedgerInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel."""

    SINGLE_OWNER = "single_owner"
    """Exactly one administrator at all times. Ownership moves only through
    transfer_ownership and never to the zero address."""

    UNIQUE_PARTICIPANTS = "unique_participants"
    """An identity is either an active participant or absent; no duplicates
    and no soft-deleted entries. Enforced by the registry operations and a
    (ledger_id, address) unique constraint."""

    PAUSE_GATED_MUTATION = "pause_gated_mutation"
    """While paused, every mutating operation except unpause and ownership
    transfer fails with HaltedError."""

    EVEN_SPLIT = "even_split"
    """A split credits exactly value / 2 to each of two distinct recipients;
    odd values are rejected, never rounded."""

    SOLVENCY = "solvency"
    """The sum of credited balances never exceeds the value the ledger
    holds. Checked after every successful call."""

    ZERO_BEFORE_RELEASE = "zero_before_release"
    """A withdrawal zeroes the caller's balance before any value leaves the
    ledger, so a re-entrant withdrawal observes nothing to claim."""

    ATOMIC_CALLS = "atomic_calls"
    """A failed call leaves no observable mutation: no balance change, no
    registry change, no journal event."""


# All invariants as a frozenset for programmatic checks.
ALL_LEDGER_INVARIANTS: frozenset[LedgerInvariant] = frozenset(LedgerInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "splitter_config",
    "scripts",
)
