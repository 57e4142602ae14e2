"""Withdrawal gate: debit-then-release, pause gating and zero balances."""

import pytest

from splitter_kernel.domain import gates, split, withdrawal
from splitter_kernel.domain.events import LedgerEventType
from splitter_kernel.domain.policy import LedgerPolicy
from splitter_kernel.exceptions import HaltedError, ZeroBalanceError
from splitter_kernel.splitter import Wallets
from tests.conftest import ALICE, BOB, CAROL, MALLORY, OWNER


@pytest.fixture
def funded(state):
    split.split_eth(state, ALICE, BOB, CAROL, 10)
    state.events.clear()
    return state


class TestDebit:
    def test_debit_zeroes_balance_and_held_value(self, funded):
        payout = withdrawal.debit_for_withdrawal(funded, BOB)

        assert payout == withdrawal.Payout(recipient=BOB, amount=5)
        assert funded.balance_of(BOB) == 0
        assert funded.held_value == 5
        [event] = funded.events
        assert event.event_type == LedgerEventType.WITHDRAWN
        assert event.data == {"recipient": BOB, "amount": 5}

    def test_zero_balance_rejected(self, funded):
        with pytest.raises(ZeroBalanceError, match="balance can't be 0"):
            withdrawal.debit_for_withdrawal(funded, MALLORY)
        assert funded.events == []

    def test_second_debit_rejected(self, funded):
        withdrawal.debit_for_withdrawal(funded, BOB)
        with pytest.raises(ZeroBalanceError):
            withdrawal.debit_for_withdrawal(funded, BOB)

    def test_paused_rejected_by_default(self, funded):
        gates.pause(funded, OWNER)
        with pytest.raises(HaltedError):
            withdrawal.debit_for_withdrawal(funded, BOB)
        assert funded.balance_of(BOB) == 5

    def test_policy_can_allow_withdrawal_while_paused(self, funded):
        gates.pause(funded, OWNER)
        policy = LedgerPolicy(pause_blocks_withdrawals=False)
        payout = withdrawal.debit_for_withdrawal(funded, BOB, policy)
        assert payout.amount == 5

    def test_non_participant_recipient_may_withdraw(self, state):
        split.split_eth(state, ALICE, MALLORY, CAROL, 4)
        assert withdrawal.debit_for_withdrawal(state, MALLORY).amount == 2


class TestWithdraw:
    def test_withdraw_releases_to_sink(self, funded):
        wallets = Wallets()
        assert withdrawal.withdraw(funded, CAROL, wallets) == 5
        assert wallets.balance_of(CAROL) == 5
        assert funded.balance_of(CAROL) == 0

    def test_balance_zero_when_sink_runs(self, funded):
        observed = []

        class ObservingSink:
            def release(self, recipient, amount):
                observed.append((funded.balance_of(recipient), amount))

        withdrawal.withdraw(funded, BOB, ObservingSink())
        assert observed == [(0, 5)]

    def test_reentrant_sink_hits_zero_balance(self, funded):
        class ReentrantSink:
            def release(self, recipient, amount):
                withdrawal.withdraw(funded, recipient, self)

        with pytest.raises(ZeroBalanceError):
            withdrawal.withdraw(funded, BOB, ReentrantSink())
