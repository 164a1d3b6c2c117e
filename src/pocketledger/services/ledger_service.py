"""Ledger service: the state container that owns transactions and balances."""

import copy
import dataclasses
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterator, Optional

from pocketledger.core.dates import parse_date, today_local
from pocketledger.core.exceptions import NotFoundError, PersistenceError, ValidationError
from pocketledger.core.ids import new_id
from pocketledger.domain.models import (
    Account,
    AccountType,
    Category,
    CategoryType,
    LedgerState,
    Snapshot,
    Transaction,
    TransactionSplit,
    TransactionType,
    TRANSFER_CATEGORY_ID,
    default_accounts,
    default_categories,
)
from pocketledger.domain.views import ExportRequest, ExportSnapshot
from pocketledger.repositories.protocols import PersistenceAdapter
from pocketledger.services import balance_engine
from pocketledger.services.balance_engine import APPLY, REVERSE
from pocketledger.services.export_service import build_export_snapshot
from pocketledger.services.notifications import NotificationCenter

logger = logging.getLogger(__name__)

StateObserver = Callable[[LedgerState], None]

SYNC_FAILED_MESSAGE = "Sync failed"

# Money is kept to the cent
MONEY_PLACES = 2


@dataclass
class TransactionData:
    """Input for creating a transaction or replacing one on edit."""

    amount: Any
    type: TransactionType
    from_account_id: Optional[str]
    date: Optional[Any] = None
    category_id: Optional[str] = None
    description: str = ""
    to_account_id: Optional[str] = None
    splits: list[TransactionSplit] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.type, str):
            self.type = TransactionType(self.type)


@dataclass
class AccountCreate:
    """Input data for creating an account."""

    name: str
    type: AccountType
    opening_balance: Decimal = Decimal("0")
    color: str = "#71717a"
    credit_limit: Optional[Decimal] = None
    due_date: Optional[str] = None


@dataclass
class AccountUpdate:
    """Partial update data for editing an account."""

    name: Optional[str] = None
    type: Optional[AccountType] = None
    color: Optional[str] = None
    credit_limit: Optional[Decimal] = None
    due_date: Optional[str] = None
    opening_balance: Optional[Decimal] = None


class LedgerService:
    """
    Service owning the in-memory ledger and its persistence.

    Every transaction mutation moves the transaction log and the account
    balances together: the change is computed with the balance engine,
    persisted through the adapter as one full state, and only then published
    to observers. Mutations are serialised by their own lock; the state
    itself sits behind a short lock that is never held across adapter calls,
    so a remote update arriving mid-write is deferred rather than blocked.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        notifications: Optional[NotificationCenter] = None,
        seed_defaults: bool = True,
        reconcile_on_load: bool = True,
        persist_undo: bool = False,
    ):
        self._adapter = adapter
        self._notifications = notifications or NotificationCenter()
        self._seed_defaults = seed_defaults
        self._reconcile_on_load = reconcile_on_load
        self._persist_undo = persist_undo

        self._mutation_lock = threading.RLock()
        self._state_lock = threading.Lock()
        self._state = LedgerState()
        self._observers: list[StateObserver] = []
        self._unsubscribe_remote: Optional[Callable[[], None]] = None
        self._mutating = False
        self._deferred_remote: Optional[LedgerState] = None
        self._changed = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> LedgerState:
        """
        Load the ledger and attach to live updates.

        An empty store (first run for an identity) is seeded with the default
        accounts and categories. With ``reconcile_on_load`` stored balances
        are checked against the transaction log and repaired.
        """
        with self._mutation():
            state = self._adapter.load()
            if state.is_empty and self._seed_defaults:
                state = LedgerState(
                    accounts=default_accounts(),
                    categories=default_categories(),
                    transactions=state.transactions,
                )
                self._adapter.persist(state)
                logger.info("Seeded default accounts and categories")

            if self._reconcile_on_load:
                drift = balance_engine.find_drift(state.accounts, state.transactions)
                if drift:
                    for account_id, (stored, expected) in drift.items():
                        logger.warning(
                            "Balance drift on %s: stored %s, expected %s", account_id, stored, expected
                        )
                    state.accounts = balance_engine.recompute_balances(state.accounts, state.transactions)
                    self._adapter.persist(state)

            self._replace_state(state)

        if self._unsubscribe_remote is None:
            self._unsubscribe_remote = self._adapter.subscribe(self._on_remote_change)
        return self.state()

    def reload(self, source: Optional[Callable[[], LedgerState]] = None) -> LedgerState:
        """
        Replace the in-memory ledger with a freshly read one.

        Args:
            source: Callable returning the new ledger; defaults to the
                adapter's ``load``. It runs under the mutation lock, so a
                remote pull cannot interleave with local edits.

        Returns:
            The reloaded ledger. Any pending undo is dropped.

        Raises:
            PersistenceError: If reading fails; the current ledger is kept.
        """
        with self._mutation():
            try:
                state = (source or self._adapter.load)()
            except PersistenceError as exc:
                logger.exception("Reloading ledger failed: %s", exc.message)
                self._notifications.notify(SYNC_FAILED_MESSAGE)
                raise
            self._replace_state(state)
            self._notifications.clear()
            self._notifications.notify("Ledger reloaded")
            logger.info("Reloaded ledger with %d transactions", len(state.transactions))
        return self.state()

    def sign_out(self) -> None:
        """Detach from live updates and forget the in-memory ledger."""
        self._cancel_subscription()
        with self._mutation():
            self._replace_state(LedgerState())
            self._notifications.clear()

    def close(self) -> None:
        """Cancel subscriptions and release the adapter."""
        self._cancel_subscription()
        self._adapter.close()

    # ------------------------------------------------------------------
    # Observer contract
    # ------------------------------------------------------------------

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """Register an observer called with the new state after every change."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @property
    def notifications(self) -> NotificationCenter:
        return self._notifications

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def state(self) -> LedgerState:
        """Return a copy of the full in-memory ledger."""
        with self._state_lock:
            return self._state.copy()

    @property
    def accounts(self) -> list[Account]:
        with self._state_lock:
            return copy.deepcopy(self._state.accounts)

    @property
    def categories(self) -> list[Category]:
        with self._state_lock:
            return copy.deepcopy(self._state.categories)

    @property
    def transactions(self) -> list[Transaction]:
        with self._state_lock:
            return copy.deepcopy(self._state.transactions)

    def get_account(self, account_id: str) -> Account:
        with self._state_lock:
            return copy.deepcopy(self._find_account(account_id))

    def get_transaction(self, transaction_id: str) -> Transaction:
        with self._state_lock:
            return copy.deepcopy(self._find_transaction(transaction_id))

    def list_transactions(
        self,
        txn_type: Optional[TransactionType] = None,
        account_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """Query transactions with filters, newest first."""
        with self._state_lock:
            result = [
                tx
                for tx in self._state.transactions
                if (txn_type is None or tx.type == txn_type)
                and (account_id is None or tx.touches(account_id))
                and (start_date is None or tx.date >= start_date)
                and (end_date is None or tx.date <= end_date)
            ]
            result = copy.deepcopy(result)
        result.sort(key=lambda tx: (tx.date, tx.id), reverse=True)
        return result

    def export_snapshot(self, request: ExportRequest) -> ExportSnapshot:
        """Hand a filtered, read-only copy of the ledger to an export formatter."""
        return build_export_snapshot(self.state(), request)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def create_transaction(self, data: TransactionData) -> Optional[Transaction]:
        """
        Record a new transaction and apply its effect.

        Args:
            data: Amount, type, accounts, category, date and optional splits

        Returns:
            The stored Transaction, or None when persistence failed (the
            in-memory ledger is then left as it was)

        Raises:
            ValidationError: If the input is rejected; nothing changes
        """
        with self._mutation():
            tx = self._build_transaction(new_id("tx"), data)
            accounts = balance_engine.apply_effect(self._state.accounts, tx, APPLY)
            new_state = LedgerState(
                accounts=accounts,
                categories=self._state.categories,
                transactions=self._state.transactions + [tx],
            )
            if not self._commit(new_state, "Entry saved"):
                return None
            logger.info("Created %s transaction %s (%s)", tx.type.value, tx.id, tx.amount)
            return copy.deepcopy(tx)

    def update_transaction(self, transaction_id: str, data: TransactionData) -> Optional[Transaction]:
        """
        Replace a transaction: reverse the old effect, then apply the new one.

        Args:
            transaction_id: Id of the transaction to replace
            data: The full new contents; the id is kept

        Returns:
            The updated Transaction, or None when persistence failed

        Raises:
            NotFoundError: If the id is unknown; nothing changes
            ValidationError: If the new contents are rejected
        """
        with self._mutation():
            old_tx = self._find_transaction(transaction_id)
            new_tx = self._build_transaction(transaction_id, data)

            mid = balance_engine.apply_effect(self._state.accounts, old_tx, REVERSE)
            accounts = balance_engine.apply_effect(mid, new_tx, APPLY)
            new_state = LedgerState(
                accounts=accounts,
                categories=self._state.categories,
                transactions=[new_tx if tx.id == transaction_id else tx for tx in self._state.transactions],
            )
            if not self._commit(new_state, "Entry updated"):
                return None
            logger.info("Updated transaction %s", transaction_id)
            return copy.deepcopy(new_tx)

    def delete_transaction(self, transaction_id: str) -> bool:
        """
        Reverse a transaction's effect and remove it.

        Args:
            transaction_id: Id of the transaction to remove

        Returns:
            True once removed, False when persistence failed

        Raises:
            NotFoundError: If the id is unknown
        """
        with self._mutation():
            tx = self._find_transaction(transaction_id)
            accounts = balance_engine.apply_effect(self._state.accounts, tx, REVERSE)
            new_state = LedgerState(
                accounts=accounts,
                categories=self._state.categories,
                transactions=[t for t in self._state.transactions if t.id != transaction_id],
            )
            if not self._commit(new_state, "Entry deleted"):
                return False
            logger.info("Deleted transaction %s", transaction_id)
            return True

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def create_account(self, data: AccountCreate) -> Optional[Account]:
        """
        Add an account whose balance starts at its opening balance.

        Args:
            data: Name, type, opening balance and card details

        Returns:
            Created Account instance, or None when persistence failed
        """
        if not data.name or not data.name.strip():
            raise ValidationError("Account name is required")
        opening = self._as_decimal(data.opening_balance, "opening_balance")

        with self._mutation():
            account = Account(
                id=new_id("acc"),
                name=data.name.strip(),
                type=data.type,
                balance=opening,
                color=data.color,
                credit_limit=self._as_optional_decimal(data.credit_limit, "credit_limit"),
                due_date=data.due_date,
                opening_balance=opening,
            )
            new_state = LedgerState(
                accounts=self._state.accounts + [account],
                categories=self._state.categories,
                transactions=self._state.transactions,
            )
            if not self._commit(new_state, "Account added"):
                return None
            return copy.deepcopy(account)

    def update_account(self, account_id: str, patch: AccountUpdate) -> Optional[Account]:
        """
        Edit an account's descriptive fields.

        The balance only moves when ``opening_balance`` changes, by exactly
        the same delta.

        Args:
            account_id: Id of the account to edit
            patch: Fields to change; None leaves a field as it is

        Returns:
            Updated Account instance, or None when persistence failed
        """
        with self._mutation():
            account = self._find_account(account_id)
            changes: dict[str, Any] = {}
            if patch.name is not None:
                if not patch.name.strip():
                    raise ValidationError("Account name is required")
                changes["name"] = patch.name.strip()
            if patch.type is not None:
                changes["type"] = AccountType(patch.type)
            if patch.color is not None:
                changes["color"] = patch.color
            if patch.credit_limit is not None:
                changes["credit_limit"] = self._as_decimal(patch.credit_limit, "credit_limit")
            if patch.due_date is not None:
                changes["due_date"] = patch.due_date
            if patch.opening_balance is not None:
                opening = self._as_decimal(patch.opening_balance, "opening_balance")
                changes["opening_balance"] = opening
                changes["balance"] = account.balance + (opening - account.opening_balance)

            updated = dataclasses.replace(account, **changes)
            new_state = LedgerState(
                accounts=[updated if a.id == account_id else a for a in self._state.accounts],
                categories=self._state.categories,
                transactions=self._state.transactions,
            )
            if not self._commit(new_state, "Account updated"):
                return None
            return copy.deepcopy(updated)

    def delete_account(self, account_id: str) -> bool:
        """
        Remove an account.

        Transactions referencing it are kept; their effect on the missing
        account is ignored from now on.
        """
        with self._mutation():
            self._find_account(account_id)
            new_state = LedgerState(
                accounts=[a for a in self._state.accounts if a.id != account_id],
                categories=self._state.categories,
                transactions=self._state.transactions,
            )
            return self._commit(new_state, "Account removed")

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def create_category(
        self,
        name: str,
        category_type: CategoryType,
        icon: Optional[str] = None,
    ) -> Optional[Category]:
        """Add a user category."""
        if not name or not name.strip():
            raise ValidationError("Category name is required")

        with self._mutation():
            category = Category(id=new_id("cat"), name=name.strip(), type=category_type, icon=icon)
            new_state = LedgerState(
                accounts=self._state.accounts,
                categories=self._state.categories + [category],
                transactions=self._state.transactions,
            )
            if not self._commit(new_state, "Category added", undoable=False):
                return None
            return copy.deepcopy(category)

    def update_category(
        self,
        category_id: str,
        name: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> Optional[Category]:
        """Rename a category or change its icon."""
        self._reject_reserved_category(category_id)
        if name is not None and not name.strip():
            raise ValidationError("Category name is required")

        with self._mutation():
            category = self._find_category(category_id)
            changes: dict[str, Any] = {}
            if name is not None:
                changes["name"] = name.strip()
            if icon is not None:
                changes["icon"] = icon
            updated = dataclasses.replace(category, **changes)
            new_state = LedgerState(
                accounts=self._state.accounts,
                categories=[updated if c.id == category_id else c for c in self._state.categories],
                transactions=self._state.transactions,
            )
            if not self._commit(new_state, "Category updated", undoable=False):
                return None
            return copy.deepcopy(updated)

    def delete_category(self, category_id: str) -> bool:
        """Remove a category; transactions keep their category id."""
        self._reject_reserved_category(category_id)
        with self._mutation():
            self._find_category(category_id)
            new_state = LedgerState(
                accounts=self._state.accounts,
                categories=[c for c in self._state.categories if c.id != category_id],
                transactions=self._state.transactions,
            )
            return self._commit(new_state, "Category removed", undoable=False)

    # ------------------------------------------------------------------
    # Undo and repair
    # ------------------------------------------------------------------

    def undo(self) -> LedgerState:
        """
        Restore transactions and accounts from the pending snapshot.

        The restored state stays local unless ``persist_undo`` is enabled.

        Returns:
            The restored ledger

        Raises:
            ValidationError: If no snapshot is pending
        """
        with self._mutation():
            snapshot = self._notifications.take_undo()
            if snapshot is None:
                raise ValidationError("Nothing to undo")

            restored = LedgerState(
                accounts=copy.deepcopy(snapshot.accounts),
                categories=self._state.categories,
                transactions=copy.deepcopy(snapshot.transactions),
            )
            self._replace_state(restored)
            if self._persist_undo:
                try:
                    self._adapter.persist(restored.copy())
                except PersistenceError as exc:
                    logger.error("Failed to persist undo: %s", exc.message)
                    self._notifications.notify(SYNC_FAILED_MESSAGE)
            logger.info("Undid last mutation")

        return self.state()

    def reconcile(self) -> dict[str, tuple[Decimal, Decimal]]:
        """
        Rebuild balances from the transaction log.

        Returns the drift that was corrected as ``{account_id: (stored,
        expected)}``; an empty dict means the ledger was already consistent.
        """
        with self._mutation():
            drift = balance_engine.find_drift(self._state.accounts, self._state.transactions)
            if not drift:
                return {}
            for account_id, (stored, expected) in drift.items():
                logger.warning("Balance drift on %s: stored %s, expected %s", account_id, stored, expected)
            new_state = LedgerState(
                accounts=balance_engine.recompute_balances(self._state.accounts, self._state.transactions),
                categories=self._state.categories,
                transactions=self._state.transactions,
            )
            if not self._commit(new_state, "Balances reconciled"):
                return {}
            return drift

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(self, new_state: LedgerState, message: str, undoable: bool = True) -> bool:
        """
        Persist ``new_state`` and make it current.

        Called inside a mutation. On PersistenceError the previous state is
        kept and the failure is logged and surfaced as a notification.
        """
        snapshot = Snapshot.capture(self._state)
        try:
            self._adapter.persist(new_state.copy())
        except PersistenceError as exc:
            # A state received during a failed write may be a partial echo of
            # that write; drop it and wait for the next remote event.
            with self._state_lock:
                self._deferred_remote = None
            logger.exception("Persisting ledger failed: %s", exc.message)
            self._notifications.notify(SYNC_FAILED_MESSAGE)
            return False

        self._replace_state(new_state)
        if undoable:
            self._notifications.push(message, snapshot)
        else:
            self._notifications.notify(message)
        return True

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        """
        Serialise a mutation and publish once it is done.

        Remote updates received meanwhile are held back and applied after the
        mutation, so the most recent write is the one that sticks.
        """
        with self._mutation_lock:
            with self._state_lock:
                self._mutating = True
                self._changed = False
            try:
                yield
            finally:
                with self._state_lock:
                    self._mutating = False
                    deferred, self._deferred_remote = self._deferred_remote, None
                    if deferred is not None:
                        self._state = deferred
                        self._changed = True
                    changed, self._changed = self._changed, False
        if changed:
            self._publish()

    def _replace_state(self, state: LedgerState) -> None:
        with self._state_lock:
            self._state = state
            self._changed = True

    def _on_remote_change(self, state: LedgerState) -> None:
        with self._state_lock:
            if self._mutating:
                self._deferred_remote = state
                return
            self._state = state
        logger.debug("Applied remote update (%d transactions)", len(state.transactions))
        self._publish()

    def _publish(self) -> None:
        state = self.state()
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception("Ledger observer failed")

    def _cancel_subscription(self) -> None:
        if self._unsubscribe_remote is not None:
            self._unsubscribe_remote()
            self._unsubscribe_remote = None

    def _find_transaction(self, transaction_id: str) -> Transaction:
        for tx in self._state.transactions:
            if tx.id == transaction_id:
                return tx
        raise NotFoundError("Transaction", transaction_id)

    def _find_account(self, account_id: str) -> Account:
        for account in self._state.accounts:
            if account.id == account_id:
                return account
        raise NotFoundError("Account", account_id)

    def _find_category(self, category_id: str) -> Category:
        for category in self._state.categories:
            if category.id == category_id:
                return category
        raise NotFoundError("Category", category_id)

    @staticmethod
    def _reject_reserved_category(category_id: str) -> None:
        if category_id == TRANSFER_CATEGORY_ID:
            raise ValidationError("The transfer category cannot be modified")

    def _build_transaction(self, transaction_id: str, data: TransactionData) -> Transaction:
        """Validate input against the current ledger and build the record."""
        if data.amount is None or data.amount == "":
            raise ValidationError("Amount is required")
        amount = self._as_decimal(data.amount, "amount")
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero")

        if not data.from_account_id:
            raise ValidationError("Source account is required")
        account_ids = {a.id for a in self._state.accounts}
        if data.from_account_id not in account_ids:
            raise ValidationError(f"Unknown account: {data.from_account_id}")

        try:
            tx_date = parse_date(data.date) if data.date else today_local()
        except (ValueError, OverflowError) as exc:
            raise ValidationError(f"Invalid date: {data.date}") from exc

        if data.type == TransactionType.TRANSFER:
            if not data.to_account_id:
                raise ValidationError("Transfer requires a destination account")
            if data.to_account_id == data.from_account_id:
                raise ValidationError("Transfer source and destination must differ")
            if data.to_account_id not in account_ids:
                raise ValidationError(f"Unknown account: {data.to_account_id}")
            if data.splits:
                raise ValidationError("Transfers cannot be split")
            category_id = TRANSFER_CATEGORY_ID
            to_account_id = data.to_account_id
            splits: list[TransactionSplit] = []
        else:
            category_id = self._validate_category(data.category_id, data.type)
            to_account_id = None
            splits = self._validate_splits(data.splits, amount, data.type)

        return Transaction(
            id=transaction_id,
            amount=amount,
            type=data.type,
            from_account_id=data.from_account_id,
            date=tx_date,
            category_id=category_id,
            description=(data.description or "").strip(),
            to_account_id=to_account_id,
            splits=splits,
        )

    def _validate_category(self, category_id: Optional[str], txn_type: TransactionType) -> str:
        if not category_id:
            raise ValidationError(f"{txn_type.value} requires a category")
        if category_id == TRANSFER_CATEGORY_ID:
            raise ValidationError("The transfer category is reserved for transfers")
        for category in self._state.categories:
            if category.id == category_id:
                if category.type.value != txn_type.value:
                    raise ValidationError(
                        f"Category '{category.name}' is {category.type.value}, not {txn_type.value}"
                    )
                return category_id
        raise ValidationError(f"Unknown category: {category_id}")

    def _validate_splits(
        self,
        splits: list[TransactionSplit],
        amount: Decimal,
        txn_type: TransactionType,
    ) -> list[TransactionSplit]:
        if not splits:
            return []
        validated = []
        for split in splits:
            split_amount = self._as_decimal(split.amount, "split amount")
            if split_amount <= 0:
                raise ValidationError("Split amounts must be greater than zero")
            validated.append(
                TransactionSplit(
                    category_id=self._validate_category(split.category_id, txn_type),
                    amount=split_amount,
                    description=split.description,
                )
            )
        total = sum((s.amount for s in validated), Decimal("0"))
        if total != amount:
            raise ValidationError(f"Splits add up to {total}, expected {amount}")
        return validated

    @staticmethod
    def _as_decimal(value: Any, field_name: str) -> Decimal:
        if isinstance(value, Decimal):
            result = value
        else:
            try:
                result = Decimal(str(value))
            except (InvalidOperation, ValueError) as exc:
                raise ValidationError(f"Invalid {field_name}: {value}") from exc
        if not result.is_finite():
            raise ValidationError(f"Invalid {field_name}: {value}")
        if result.normalize().as_tuple().exponent < -MONEY_PLACES:
            raise ValidationError(f"{field_name} allows at most {MONEY_PLACES} decimal places: {value}")
        return result

    @classmethod
    def _as_optional_decimal(cls, value: Any, field_name: str) -> Optional[Decimal]:
        return None if value is None else cls._as_decimal(value, field_name)
