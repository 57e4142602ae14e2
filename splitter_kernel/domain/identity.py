"""
Identity -- Opaque, fixed-width account identity value object.

Responsibility:
    Provides ``Address``, the single identity type used for callers,
    recipients, the administrator, and balance-ledger keys.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every other domain module.

Invariants enforced:
    - An Address is ``0x`` followed by exactly 40 hexadecimal digits.
    - Addresses are normalized to lower case at construction, so equality
      is total and case-insensitive input never creates two keys for one
      account.

Failure modes:
    - ValueError on construction from a malformed string.
    - TypeError on construction from anything other than str or Address.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{40}$")

ADDRESS_HEX_LENGTH = 40


@dataclass(frozen=True, slots=True, order=True)
class Address:
    """
    Account identity value object.

    Contract:
        Wraps a 20-byte account reference written as ``0x`` + 40 hex
        digits.  Validated and normalized on construction.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots), usable as a
          dict or set key.
        - ``value`` is always lower case.

    Non-goals:
        - Does NOT verify checksummed (mixed-case) encodings; case is
          discarded.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"Address value must be str, got {type(self.value).__name__}")
        normalized = self.value.strip().lower()
        if not _ADDRESS_RE.match(normalized):
            raise ValueError(f"Invalid address: {self.value!r}")
        object.__setattr__(self, "value", normalized)

    @classmethod
    def parse(cls, raw: str | Address) -> Address:
        """Return ``raw`` as an Address, constructing one from a string."""
        if isinstance(raw, Address):
            return raw
        if isinstance(raw, str):
            return cls(raw)
        raise TypeError(f"Cannot build Address from {type(raw).__name__}")

    @classmethod
    def from_int(cls, number: int) -> Address:
        """Build an Address from its integer form (left-padded to 20 bytes)."""
        if number < 0 or number >= 16**ADDRESS_HEX_LENGTH:
            raise ValueError(f"Address integer out of range: {number}")
        return cls(f"0x{number:0{ADDRESS_HEX_LENGTH}x}")

    @property
    def is_zero(self) -> bool:
        return self == ZERO_ADDRESS

    def short(self) -> str:
        """Abbreviated form for human-facing output."""
        return f"{self.value[:6]}…{self.value[-4:]}"

    def __copy__(self) -> Address:
        return self

    def __deepcopy__(self, memo: dict) -> Address:
        return self

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Address({self.value!r})"


ZERO_ADDRESS = Address("0x" + "0" * ADDRESS_HEX_LENGTH)
