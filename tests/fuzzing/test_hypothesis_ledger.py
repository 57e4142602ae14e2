"""
Property-based tests for the ledger invariants.

Hypothesis generates arbitrary call sequences against the in-memory host and
checks after every call that:
- owed balances never exceed held value (and equal it exactly here, since
  every credit is backed by a deposit and every withdrawal debits both);
- every successful split credits exactly value // 2 to each recipient;
- a rejected call leaves the canonical state hash unchanged.
"""

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.split import halve
from splitter_kernel.exceptions import SplitterError, UnevenSplitError
from splitter_kernel.splitter import Splitter

OWNER = Address.from_int(1)
IDENTITIES = [Address.from_int(n) for n in range(1, 7)]

identities = st.sampled_from(IDENTITIES)
amounts = st.integers(min_value=-4, max_value=2**80)

calls = st.one_of(
    st.tuples(st.just("add_participant"), identities, identities),
    st.tuples(st.just("remove_participant"), identities, identities),
    st.tuples(st.just("pause"), identities),
    st.tuples(st.just("unpause"), identities),
    st.tuples(st.just("split_eth"), identities, identities, identities, amounts),
    st.tuples(st.just("withdraw"), identities),
)


def _invoke(ledger: Splitter, call: tuple) -> None:
    name, *args = call
    if name == "split_eth":
        caller, r1, r2, value = args
        ledger.split_eth(caller, r1, r2, value=value)
    else:
        getattr(ledger, name)(*args)


def _owed(ledger: Splitter) -> int:
    return sum(ledger.balance_of(i) for i in IDENTITIES)


@settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])
@given(st.lists(calls, max_size=40))
def test_solvency_holds_for_any_call_sequence(sequence):
    ledger = Splitter(OWNER)
    for call in sequence:
        before = ledger.canonical_hash()
        try:
            _invoke(ledger, call)
        except SplitterError:
            assert ledger.canonical_hash() == before
        assert _owed(ledger) == ledger.held_value()
        assert all(ledger.balance_of(i) >= 0 for i in IDENTITIES)


@given(
    value=st.integers(min_value=1, max_value=2**256),
    r1=identities,
    r2=identities,
)
def test_split_credits_exact_halves(value, r1, r2):
    caller = Address.from_int(0xCA11E2)
    ledger = Splitter(OWNER)
    ledger.add_participant(OWNER, caller)
    try:
        result = ledger.split_eth(caller, r1, r2, value=value)
    except UnevenSplitError:
        assert value % 2 == 1
        return
    except SplitterError:
        assert r1 == r2
        return
    assert result.share * 2 == value
    assert ledger.balance_of(r1) == ledger.balance_of(r2) == value // 2


@given(st.integers(min_value=1, max_value=2**256))
def test_halve_is_exact_or_rejects(value):
    if value % 2:
        try:
            halve(value)
        except UnevenSplitError:
            return
        raise AssertionError("odd value was not rejected")
    assert halve(value) * 2 == value


@given(st.lists(st.tuples(identities, st.integers(min_value=1, max_value=10**6)), max_size=20))
def test_withdraw_releases_exactly_what_was_credited(deposits):
    caller = Address.from_int(0xCA11E2)
    ledger = Splitter(OWNER)
    ledger.add_participant(OWNER, caller)
    partner = Address.from_int(0xFEED)
    credited = {}
    for recipient, half in deposits:
        ledger.split_eth(caller, recipient, partner, value=half * 2)
        credited[recipient] = credited.get(recipient, 0) + half

    for recipient, amount in credited.items():
        assert ledger.withdraw(recipient) == amount
        assert ledger.sink.balance_of(recipient) == amount
    assert ledger.held_value() == ledger.balance_of(partner)
