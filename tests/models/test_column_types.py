"""Column types that carry domain values: AddressString and AmountString."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import StatementError

from splitter_kernel.db.base import AddressString, AmountString
from splitter_kernel.models.ledger import LedgerRecord
from tests.conftest import ALICE, OWNER


class TestAmountString:
    def test_bind_and_result(self):
        col = AmountString()
        assert col.process_bind_param(2**200, None) == str(2**200)
        assert col.process_result_value(str(2**200), None) == 2**200
        assert col.process_bind_param(None, None) is None

    @pytest.mark.parametrize("value", [1.5, "10", True])
    def test_non_int_rejected(self, value):
        with pytest.raises(TypeError):
            AmountString().process_bind_param(value, None)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            AmountString().process_bind_param(-1, None)


class TestAddressString:
    def test_bind_accepts_string_and_address(self):
        col = AddressString()
        assert col.process_bind_param(ALICE, None) == str(ALICE)
        assert col.process_bind_param(str(ALICE).upper().replace("0X", "0x"), None) == str(ALICE)

    def test_result_is_address(self):
        assert AddressString().process_result_value(str(ALICE), None) == ALICE


class TestPersistedRows:
    def test_ledger_round_trip(self, session):
        record = LedgerRecord(
            ledger_code="rt",
            owner=OWNER,
            paused=False,
            held_value=2**100,
            last_event_seq=0,
            require_participant_caller=True,
            min_participants=0,
            pause_blocks_withdrawals=True,
        )
        session.add(record)
        session.commit()
        session.expire_all()

        loaded = session.execute(
            select(LedgerRecord).where(LedgerRecord.ledger_code == "rt")
        ).scalar_one()
        assert loaded.owner == OWNER
        assert loaded.held_value == 2**100
        assert loaded.policy.require_participant_caller is True

    def test_negative_amount_refused_at_flush(self, session):
        session.add(
            LedgerRecord(
                ledger_code="neg",
                owner=OWNER,
                paused=False,
                held_value=-1,
                last_event_seq=0,
                require_participant_caller=True,
                min_participants=0,
                pause_blocks_withdrawals=True,
            )
        )
        with pytest.raises(StatementError):
            session.flush()
