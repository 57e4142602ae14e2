"""
In-memory host: end-to-end call scenarios and all-or-nothing calls.

The domain modules are tested directly under tests/domain; here the
``Splitter`` host is driven the way an application would drive it.
"""

import pytest

from splitter_kernel.domain.events import LedgerEventType
from splitter_kernel.domain.policy import LedgerPolicy
from splitter_kernel.exceptions import (
    DuplicateRecipientError,
    HaltedError,
    InvalidAmountError,
    InvalidRecipientError,
    NotOwnerError,
    SelfSplitError,
    SplitterError,
    ZeroBalanceError,
)
from splitter_kernel.splitter import Splitter, Wallets
from tests.conftest import ALICE, BOB, CAROL, MALLORY, OWNER


class SinkFailure(RuntimeError):
    pass


class FailingSink:
    def release(self, recipient, amount):
        raise SinkFailure("transfer refused")


class TestConstruction:
    def test_new_ledger_is_active_and_empty(self):
        ledger = Splitter(OWNER)
        assert ledger.owner() == OWNER
        assert ledger.is_paused() is False
        assert ledger.list_active_participants() == ()
        assert ledger.held_value() == 0
        assert ledger.events() == ()

    def test_owner_given_as_string(self):
        assert Splitter(str(OWNER)).owner() == OWNER


class TestScenarios:
    def test_split_then_withdraw(self, wallets):
        ledger = Splitter(OWNER, sink=wallets)
        for participant in (ALICE, BOB, CAROL):
            ledger.add_participant(OWNER, participant)

        ledger.split_eth(ALICE, BOB, CAROL, value=2)
        assert ledger.balance_of(BOB) == 1
        assert ledger.balance_of(CAROL) == 1

        assert ledger.withdraw(BOB) == 1
        assert wallets.balance_of(BOB) == 1
        assert ledger.balance_of(BOB) == 0

        with pytest.raises(InvalidAmountError):
            ledger.withdraw(BOB)

    def test_self_target_rejected(self, splitter):
        with pytest.raises(InvalidRecipientError):
            splitter.split_eth(ALICE, BOB, ALICE, value=2)

    def test_duplicate_target_rejected(self, splitter):
        with pytest.raises(DuplicateRecipientError):
            splitter.split_eth(ALICE, BOB, BOB, value=2)

    def test_pause_blocks_mutation_not_queries(self, splitter):
        splitter.split_eth(ALICE, BOB, CAROL, value=4)
        splitter.pause(OWNER)

        with pytest.raises(HaltedError):
            splitter.split_eth(ALICE, BOB, CAROL, value=2)
        with pytest.raises(HaltedError):
            splitter.add_participant(OWNER, CAROL)
        with pytest.raises(HaltedError):
            splitter.withdraw(BOB)

        assert splitter.is_paused()
        assert splitter.balance_of(BOB) == 2
        assert splitter.list_active_participants() == (ALICE, BOB)

        splitter.unpause(OWNER)
        assert splitter.withdraw(BOB) == 2

    def test_withdraw_allowed_while_paused_under_open_policy(self, wallets):
        ledger = Splitter(
            OWNER, sink=wallets, policy=LedgerPolicy(pause_blocks_withdrawals=False)
        )
        ledger.add_participant(OWNER, ALICE)
        ledger.split_eth(ALICE, BOB, CAROL, value=2)
        ledger.pause(OWNER)
        assert ledger.withdraw(CAROL) == 1

    def test_transfer_ownership(self, splitter):
        splitter.transfer_ownership(OWNER, ALICE)
        assert splitter.owner() == ALICE
        with pytest.raises(NotOwnerError):
            splitter.add_participant(OWNER, CAROL)
        assert splitter.add_participant(ALICE, CAROL) is True

    def test_journal_records_calls_in_order(self, splitter):
        splitter.split_eth(ALICE, BOB, CAROL, value=2)
        splitter.withdraw(BOB)

        events = splitter.events()
        assert [e.seq for e in events] == [1, 2, 3, 4]
        assert [e.event_type for e in events] == [
            LedgerEventType.PARTICIPANT_ADDED,
            LedgerEventType.PARTICIPANT_ADDED,
            LedgerEventType.SPLIT_PERFORMED,
            LedgerEventType.WITHDRAWN,
        ]


class TestAtomicCalls:
    def test_rejected_call_leaves_state_unchanged(self, splitter):
        splitter.split_eth(ALICE, BOB, CAROL, value=2)
        before = (splitter.events(), splitter.held_value(), splitter.balance_of(BOB))

        with pytest.raises(SelfSplitError):
            splitter.split_eth(ALICE, ALICE, BOB, value=2)

        assert (splitter.events(), splitter.held_value(), splitter.balance_of(BOB)) == before

    def test_rejected_call_after_long_history(self, splitter):
        for _ in range(500):
            splitter.split_eth(ALICE, BOB, CAROL, value=2)
        events_before = splitter.events()
        hash_before = splitter.canonical_hash()

        with pytest.raises(DuplicateRecipientError):
            splitter.split_eth(ALICE, BOB, BOB, value=2)

        assert splitter.events() == events_before
        assert len(splitter.events()) == 502
        assert splitter.canonical_hash() == hash_before

        splitter.split_eth(ALICE, BOB, CAROL, value=2)
        assert splitter.events()[-1].seq == 503

    def test_published_events_are_read_only(self, splitter):
        splitter.split_eth(ALICE, BOB, CAROL, value=4)
        event = splitter.events()[-1]

        with pytest.raises(TypeError):
            event.data["share"] = 100

        assert splitter.events()[-1].data["share"] == 2

    def test_sink_failure_rolls_back_withdrawal(self, wallets):
        ledger = Splitter(OWNER, sink=FailingSink())
        ledger.add_participant(OWNER, ALICE)
        ledger.split_eth(ALICE, BOB, CAROL, value=6)
        events_before = ledger.events()

        with pytest.raises(SinkFailure):
            ledger.withdraw(BOB)

        assert ledger.balance_of(BOB) == 3
        assert ledger.held_value() == 6
        assert ledger.events() == events_before

    def test_reentrant_withdraw_is_rejected_and_rolled_back(self):
        class ReentrantSink:
            def __init__(self):
                self.ledger = None

            def release(self, recipient, amount):
                self.ledger.withdraw(recipient)

        sink = ReentrantSink()
        ledger = Splitter(OWNER, sink=sink)
        sink.ledger = ledger
        ledger.add_participant(OWNER, ALICE)
        ledger.split_eth(ALICE, BOB, CAROL, value=2)

        with pytest.raises(ZeroBalanceError):
            ledger.withdraw(BOB)
        assert ledger.balance_of(BOB) == 1
        assert ledger.held_value() == 2

    def test_rejection_logged_with_code(self, splitter, captured_logs):
        with pytest.raises(NotOwnerError):
            splitter.pause(MALLORY)

        [rejected] = [r for r in captured_logs() if r["message"] == "call_rejected"]
        assert rejected["level"] == "WARNING"
        assert rejected["code"] == "NOT_OWNER"
        assert rejected["operation"] == "pause"
        assert rejected["caller"] == str(MALLORY)
        assert rejected["ledger_code"] == "test"

    def test_sink_failure_logged_as_reverted(self, captured_logs):
        ledger = Splitter(OWNER, sink=FailingSink())
        ledger.add_participant(OWNER, ALICE)
        ledger.split_eth(ALICE, BOB, CAROL, value=2)

        with pytest.raises(SinkFailure):
            ledger.withdraw(CAROL)

        [reverted] = [r for r in captured_logs() if r["message"] == "call_reverted"]
        assert reverted["exc_type"] == "SinkFailure"


class TestSolvency:
    @pytest.mark.parametrize("value", [2, 10, 2**200])
    def test_held_value_covers_balances(self, splitter, value):
        splitter.split_eth(ALICE, BOB, CAROL, value=value)
        owed = splitter.balance_of(BOB) + splitter.balance_of(CAROL)
        assert owed == splitter.held_value() == value

    def test_every_failure_is_a_splitter_error(self, splitter):
        calls = [
            lambda: splitter.pause(MALLORY),
            lambda: splitter.unpause(OWNER),
            lambda: splitter.remove_participant(OWNER, CAROL),
            lambda: splitter.split_eth(MALLORY, BOB, CAROL, value=2),
            lambda: splitter.split_eth(ALICE, BOB, CAROL, value=1),
            lambda: splitter.withdraw(MALLORY),
        ]
        for call in calls:
            with pytest.raises(SplitterError):
                call()
