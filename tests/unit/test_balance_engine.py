"""
Unit tests for the balance reconciliation engine.

Tests cover:
- Income, expense and transfer effects
- Apply/reverse round trips with exact decimals
- Transfer conservation
- Missing accounts and invalid factors
- Drift detection and balance rebuild
"""

from datetime import date
from decimal import Decimal

import pytest

from pocketledger.domain.models import Account, AccountType, Transaction, TransactionType
from pocketledger.services.balance_engine import (
    APPLY,
    REVERSE,
    apply_effect,
    find_drift,
    recompute_balances,
    transaction_effects,
)


def _account(account_id: str, balance: str, opening: str = None) -> Account:
    return Account(
        id=account_id,
        name=account_id.upper(),
        type=AccountType.BANK,
        balance=Decimal(balance),
        opening_balance=Decimal(opening if opening is not None else balance),
    )


def _tx(
    txn_type: TransactionType,
    amount: str,
    from_account_id: str = "A",
    to_account_id: str = None,
    tx_id: str = "tx-1",
) -> Transaction:
    return Transaction(
        id=tx_id,
        amount=Decimal(amount),
        type=txn_type,
        from_account_id=from_account_id,
        date=date(2024, 6, 15),
        category_id="cat-transfer" if txn_type == TransactionType.TRANSFER else "cat-x",
        to_account_id=to_account_id,
    )


def _balance(accounts: list[Account], account_id: str) -> Decimal:
    return next(a.balance for a in accounts if a.id == account_id)


# =============================================================================
# EFFECT SCENARIOS
# =============================================================================


class TestApplyEffect:
    """Tests for applying a single transaction."""

    def test_income_credits_source_account(self):
        """
        GIVEN account A with balance 1000
        WHEN an income of 500 into A is applied
        THEN A.balance is 1500
        """
        accounts = [_account("A", "1000")]

        result = apply_effect(accounts, _tx(TransactionType.INCOME, "500"), APPLY)

        assert _balance(result, "A") == Decimal("1500")

    def test_expense_debits_source_account(self):
        """
        GIVEN account A with balance 1000
        WHEN an expense of 200 from A is applied
        THEN A.balance is 800
        """
        accounts = [_account("A", "1000")]

        result = apply_effect(accounts, _tx(TransactionType.EXPENSE, "200"), APPLY)

        assert _balance(result, "A") == Decimal("800")

    def test_transfer_moves_amount_between_accounts(self):
        """
        GIVEN A with 1000 and B with 500
        WHEN a transfer of 300 from A to B is applied
        THEN A is 700 and B is 800
        """
        accounts = [_account("A", "1000"), _account("B", "500")]

        result = apply_effect(accounts, _tx(TransactionType.TRANSFER, "300", "A", "B"), APPLY)

        assert _balance(result, "A") == Decimal("700")
        assert _balance(result, "B") == Decimal("800")

    def test_untouched_accounts_pass_through(self):
        """
        GIVEN accounts A and C
        WHEN an expense on A is applied
        THEN C is the very same object and the input list is not mutated
        """
        a, c = _account("A", "1000"), _account("C", "42")
        accounts = [a, c]

        result = apply_effect(accounts, _tx(TransactionType.EXPENSE, "10"), APPLY)

        assert result[1] is c
        assert a.balance == Decimal("1000")
        assert result is not accounts

    def test_missing_account_is_ignored(self):
        """
        GIVEN a transfer whose destination account does not exist
        WHEN it is applied
        THEN only the source account changes
        """
        accounts = [_account("A", "1000")]

        result = apply_effect(accounts, _tx(TransactionType.TRANSFER, "100", "A", "GONE"), APPLY)

        assert [a.id for a in result] == ["A"]
        assert _balance(result, "A") == Decimal("900")

    def test_invalid_factor_rejected(self):
        with pytest.raises(ValueError):
            apply_effect([_account("A", "1")], _tx(TransactionType.INCOME, "1"), 2)


# =============================================================================
# INVARIANTS
# =============================================================================


class TestEffectInvariants:
    """Round-trip and conservation properties."""

    @pytest.mark.parametrize(
        "tx",
        [
            _tx(TransactionType.INCOME, "0.10"),
            _tx(TransactionType.EXPENSE, "1234.57"),
            _tx(TransactionType.TRANSFER, "0.30", "A", "B"),
            _tx(TransactionType.TRANSFER, "99999999.99", "B", "A"),
        ],
    )
    def test_apply_then_reverse_restores_balances_exactly(self, tx):
        """
        GIVEN any valid transaction
        WHEN it is applied and then reversed
        THEN every balance equals the original exactly
        """
        accounts = [_account("A", "1000.10"), _account("B", "0.20")]

        restored = apply_effect(apply_effect(accounts, tx, APPLY), tx, REVERSE)

        assert restored == accounts
        assert [a.balance for a in restored] == [Decimal("1000.10"), Decimal("0.20")]

    def test_transfer_conserves_total(self):
        """
        GIVEN A and B
        WHEN a transfer between them is applied
        THEN the sum of both balances is unchanged
        """
        accounts = [_account("A", "1000.05"), _account("B", "-250.40")]
        tx = _tx(TransactionType.TRANSFER, "333.33", "A", "B")

        result = apply_effect(accounts, tx, APPLY)

        assert sum(a.balance for a in result) == sum(a.balance for a in accounts)

    def test_transaction_effects_for_transfer(self):
        effects = transaction_effects(_tx(TransactionType.TRANSFER, "50", "A", "B"))

        assert effects == {"A": Decimal("-50"), "B": Decimal("50")}


# =============================================================================
# DRIFT AND REBUILD
# =============================================================================


class TestReconciliation:
    """Tests for drift detection and balance rebuild."""

    def test_consistent_ledger_has_no_drift(self):
        """
        GIVEN balances that equal opening balance plus transaction effects
        WHEN drift is computed
        THEN nothing is reported
        """
        accounts = [_account("A", "1300", opening="1000"), _account("B", "500")]
        txs = [
            _tx(TransactionType.INCOME, "500", tx_id="t1"),
            _tx(TransactionType.EXPENSE, "200", tx_id="t2"),
        ]

        assert find_drift(accounts, txs) == {}

    def test_drift_reports_stored_and_expected(self):
        """
        GIVEN A stored at 1000 but with an unapplied income of 500
        WHEN drift is computed
        THEN A is reported as (1000, 1500)
        """
        accounts = [_account("A", "1000"), _account("B", "500")]
        txs = [_tx(TransactionType.INCOME, "500")]

        assert find_drift(accounts, txs) == {"A": (Decimal("1000"), Decimal("1500"))}

    def test_recompute_rebuilds_from_log(self):
        """
        GIVEN drifted balances
        WHEN balances are recomputed
        THEN each equals opening balance plus effects
        """
        accounts = [_account("A", "1", opening="1000"), _account("B", "2", opening="500")]
        txs = [_tx(TransactionType.TRANSFER, "300", "A", "B")]

        result = recompute_balances(accounts, txs)

        assert _balance(result, "A") == Decimal("700")
        assert _balance(result, "B") == Decimal("800")
        assert find_drift(result, txs) == {}
