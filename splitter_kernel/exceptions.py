"""
Typed Exception Hierarchy for the Splitter Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers must be able to branch on the *cause* of a rejected call without
parsing message text.  Every error the kernel raises is:

  1. A TYPED exception class (catch by type, not message)
  2. Tagged with a CODE class attribute (machine-readable, API-safe)
  3. Carrying structured DATA (caller, identities, amounts)

The message of every exception is a fixed reason string (``reason``) so
that logs and CLI output stay stable across releases.

Example:
    try:
        splitter.split_eth(alice, bob, carol, value=3)
    except UnevenSplitError as e:
        log.warning("rejected", extra={"code": e.code, "value": e.value})
    except InvalidAmountError as e:
        # Catch-all for zero / negative / uneven amounts
        ...

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from SplitterError:

    SplitterError (base)
    |
    +-- UnauthorizedError
    |   +-- NotOwnerError
    |   +-- NotParticipantError
    |
    +-- HaltedError
    |
    +-- InvalidStateError
    |   +-- AlreadyPausedError
    |   +-- NotPausedError
    |   +-- NotEnoughParticipantsError
    |
    +-- NotFoundError
    |   +-- ParticipantNotFoundError
    |
    +-- InvalidAmountError
    |   +-- ZeroValueError
    |   +-- NegativeValueError
    |   +-- UnevenSplitError
    |   +-- ZeroBalanceError
    |
    +-- InvalidRecipientError
    |   +-- SelfSplitError
    |   +-- DuplicateRecipientError
    |   +-- ZeroAddressOwnerError
    |
    +-- LedgerIntegrityError
        +-- SolvencyViolationError
        +-- LedgerNotFoundError
        +-- LedgerAlreadyExistsError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                      | When Raised
----------------|---------------------------|-------------------------------------
Unauthorized    | NOT_OWNER                 | Admin-only call by another identity
                | NOT_PARTICIPANT           | Split initiated by a non-member
----------------|---------------------------|-------------------------------------
Halted          | HALTED                    | Mutating call while paused
----------------|---------------------------|-------------------------------------
InvalidState    | ALREADY_PAUSED            | pause() while paused
                | NOT_PAUSED                | unpause() while active
                | NOT_ENOUGH_PARTICIPANTS   | Registry below policy minimum
----------------|---------------------------|-------------------------------------
NotFound        | PARTICIPANT_NOT_FOUND     | Removing an identity not registered
----------------|---------------------------|-------------------------------------
InvalidAmount   | ZERO_VALUE                | Split with no attached value
                | NEGATIVE_VALUE            | Split with a negative value
                | UNEVEN_SPLIT              | Odd value cannot be halved
                | ZERO_BALANCE              | Withdraw with nothing owed
----------------|---------------------------|-------------------------------------
InvalidRecipient| SELF_SPLIT                | Caller named as a recipient
                | DUPLICATE_RECIPIENT       | Both recipients identical
                | ZERO_ADDRESS_OWNER        | Ownership moved to the zero address
----------------|---------------------------|-------------------------------------
Integrity       | SOLVENCY_VIOLATION        | Owed balances exceed held value
                | LEDGER_NOT_FOUND          | Unknown ledger_code (database host)
                | LEDGER_ALREADY_EXISTS     | Duplicate ledger_code on open

===============================================================================
"""


class SplitterError(Exception):
    """
    Base exception for all splitter kernel errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    identification and a ``reason`` class attribute used as the message.
    """

    code: str = "SPLITTER_ERROR"
    reason: str = "Splitter: operation rejected"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.reason)


# Access control


class UnauthorizedError(SplitterError):
    """Caller lacks the role or membership the operation requires."""

    code: str = "UNAUTHORIZED"


class NotOwnerError(UnauthorizedError):
    """Administrator-only operation called by another identity."""

    code: str = "NOT_OWNER"
    reason: str = "Ownable: caller is not the owner"

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__()


class NotParticipantError(UnauthorizedError):
    """Split initiated by an identity that is not an active participant."""

    code: str = "NOT_PARTICIPANT"
    reason: str = "Splitter: only participants can use this function"

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__()


# Pause gate


class HaltedError(SplitterError):
    """Mutating operation attempted while the ledger is paused."""

    code: str = "HALTED"
    reason: str = "Pausable: paused"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__()


class InvalidStateError(SplitterError):
    """Ledger is not in a state that permits the operation."""

    code: str = "INVALID_STATE"


class AlreadyPausedError(InvalidStateError):
    """pause() called while already paused."""

    code: str = "ALREADY_PAUSED"
    reason: str = "Pausable: paused"

    def __init__(self) -> None:
        super().__init__()


class NotPausedError(InvalidStateError):
    """unpause() called while already active."""

    code: str = "NOT_PAUSED"
    reason: str = "Pausable: not paused"

    def __init__(self) -> None:
        super().__init__()


class NotEnoughParticipantsError(InvalidStateError):
    """Registry holds fewer participants than the ledger policy requires."""

    code: str = "NOT_ENOUGH_PARTICIPANTS"
    reason: str = "Splitter: not enough participants"

    def __init__(self, active: int, required: int):
        self.active = active
        self.required = required
        super().__init__()


# Registry


class NotFoundError(SplitterError):
    """Target of the operation does not exist."""

    code: str = "NOT_FOUND"


class ParticipantNotFoundError(NotFoundError):
    """Removal target is not an active participant."""

    code: str = "PARTICIPANT_NOT_FOUND"
    reason: str = "Splitter: the remove target address is not a participant"

    def __init__(self, participant: str):
        self.participant = participant
        super().__init__()


# Amounts


class InvalidAmountError(SplitterError):
    """Attached value or owed balance is unusable."""

    code: str = "INVALID_AMOUNT"


class ZeroValueError(InvalidAmountError):
    """Split called without attached value."""

    code: str = "ZERO_VALUE"
    reason: str = "Splitter: value can't be 0"

    def __init__(self) -> None:
        self.value = 0
        super().__init__()


class NegativeValueError(InvalidAmountError):
    """Split called with a negative value."""

    code: str = "NEGATIVE_VALUE"
    reason: str = "Splitter: value can't be negative"

    def __init__(self, value: int):
        self.value = value
        super().__init__()


class UnevenSplitError(InvalidAmountError):
    """Attached value leaves a remainder when halved."""

    code: str = "UNEVEN_SPLIT"
    reason: str = "Splitter: splitted result is not round"

    def __init__(self, value: int):
        self.value = value
        super().__init__()


class ZeroBalanceError(InvalidAmountError):
    """Withdrawal requested with nothing owed to the caller."""

    code: str = "ZERO_BALANCE"
    reason: str = "Splitter: balance can't be 0"

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__()


# Recipients


class InvalidRecipientError(SplitterError):
    """Split or transfer target is not acceptable."""

    code: str = "INVALID_RECIPIENT"


class SelfSplitError(InvalidRecipientError):
    """Caller named itself as one of the split recipients."""

    code: str = "SELF_SPLIT"
    reason: str = "Splitter: can't split to yourself"

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__()


class DuplicateRecipientError(InvalidRecipientError):
    """Both split recipients are the same identity."""

    code: str = "DUPLICATE_RECIPIENT"
    reason: str = "Splitter: participants can't be the same"

    def __init__(self, recipient: str):
        self.recipient = recipient
        super().__init__()


class ZeroAddressOwnerError(InvalidRecipientError):
    """Ownership transfer to the zero address."""

    code: str = "ZERO_ADDRESS_OWNER"
    reason: str = "Ownable: new owner is the zero address"

    def __init__(self) -> None:
        super().__init__()


# Integrity


class LedgerIntegrityError(SplitterError):
    """Ledger bookkeeping is inconsistent or the ledger cannot be located."""

    code: str = "LEDGER_INTEGRITY"


class SolvencyViolationError(LedgerIntegrityError):
    """
    Credited balances exceed the value the ledger holds.

    This can only happen through a kernel defect; hosts treat it as fatal
    for the current call and roll back.
    """

    code: str = "SOLVENCY_VIOLATION"
    reason: str = "Splitter: owed balances exceed held value"

    def __init__(self, owed: int, held: int):
        self.owed = owed
        self.held = held
        super().__init__(f"{self.reason}: owed={owed}, held={held}")


class LedgerNotFoundError(LedgerIntegrityError):
    """No persisted ledger exists under the given code."""

    code: str = "LEDGER_NOT_FOUND"
    reason: str = "Splitter: ledger not found"

    def __init__(self, ledger_code: str):
        self.ledger_code = ledger_code
        super().__init__(f"{self.reason}: {ledger_code}")


class LedgerAlreadyExistsError(LedgerIntegrityError):
    """A persisted ledger already uses the given code."""

    code: str = "LEDGER_ALREADY_EXISTS"
    reason: str = "Splitter: ledger already exists"

    def __init__(self, ledger_code: str):
        self.ledger_code = ledger_code
        super().__init__(f"{self.reason}: {ledger_code}")
