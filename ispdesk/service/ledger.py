"""
Ledger engine: customer balances and the append-only payment log.

Every balance change and the transaction that explains it are committed in
one database transaction while the customer's lock is held, so the displayed
due and the ledger trail used for receipts never drift apart.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from ispdesk.extension import db
from ispdesk.models import Customer, Transaction
from ispdesk.models.customer import CustomerStatus
from ispdesk.models.transaction import PaymentType
from ispdesk.service.locks import customer_locks
from ispdesk.utils.change_logger import log_change

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "name",
    "phone",
    "address",
    "monthly_plan_amount",
    "due_day",
    "photo",
    "total_due",
)


class IdempotencyConflict(Exception):
    """An idempotency key was replayed against a different customer."""


@dataclass
class LedgerFilter:
    search: str = ""
    start_date: str = ""
    end_date: str = ""
    payment_type: str = ""

    def matches(self, txn):
        if self.search:
            term = self.search.lower()
            found = (
                term in (txn.notes or "").lower()
                or term in txn.collector_name.lower()
                or term in amount_text(txn.amount_paid)
            )
            if not found:
                return False

        # Plain string comparison on the ISO date prefix; bounds must be YYYY-MM-DD.
        day = txn.date.isoformat()[:10]
        if self.start_date and day < self.start_date:
            return False
        if self.end_date and day > self.end_date:
            return False

        if self.payment_type and txn.payment_type != self.payment_type:
            return False
        return True


def amount_text(value):
    """Render an amount the way it is typed: 500 rather than 500.0."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def classify_payment(amount, due_before):
    return PaymentType.FULL if amount >= due_before else PaymentType.PART


def get_customer(customer_id):
    return db.session.get(Customer, customer_id)


def list_customers(search="", status="", only_pending=False):
    query = Customer.query
    if only_pending:
        query = query.filter(Customer.total_due > 0)
    if status:
        query = query.filter(Customer.status == status)
    customers = query.order_by(Customer.created_at.asc()).all()

    if search:
        term = search.strip().lower()
        customers = [
            c for c in customers
            if term in c.name.lower() or search.strip() in c.phone
        ]
    return customers


def create_customer(data, actor=None):
    """New subscribers start ACTIVE and owe one month of their plan."""
    plan = float(data.get("monthly_plan_amount") or 0)
    customer = Customer(
        name=data["name"],
        phone=data["phone"],
        address=data.get("address") or "",
        monthly_plan_amount=plan,
        total_due=plan,
        status=CustomerStatus.ACTIVE,
        due_day=data.get("due_day") or 1,
        photo=data.get("photo"),
        last_billed_date=datetime.utcnow(),
    )
    db.session.add(customer)
    db.session.flush()
    log_change("Customer", customer.id, "create", {
        "name": customer.name,
        "monthly_plan_amount": plan,
    }, actor_id=actor.id if actor else None)
    db.session.commit()

    logger.info("Created customer %s (%s)", customer.id, customer.name)
    return customer


def update_customer(customer_id, changes, actor=None):
    """Admin edit. This and payments are the only writers of total_due."""
    with customer_locks.hold(customer_id):
        customer = get_customer(customer_id)
        if customer is None:
            return None

        applied = {}
        for key in EDITABLE_FIELDS:
            if key in changes:
                setattr(customer, key, changes[key])
                applied[key] = changes[key] if key != "photo" else "<photo>"

        log_change("Customer", customer.id, "update", applied,
                   actor_id=actor.id if actor else None)
        db.session.commit()
    return customer


def update_customer_status(customer_id, status, actor=None):
    customer = get_customer(customer_id)
    if customer is None:
        return None

    if customer.status != status:
        previous = customer.status
        customer.status = status
        log_change("Customer", customer.id, "status", {"from": previous, "to": status},
                   actor_id=actor.id if actor else None)
        db.session.commit()
        logger.info("Customer %s status %s -> %s", customer.id, previous, status)
    return customer


def find_payment(idempotency_key):
    if not idempotency_key:
        return None
    return Transaction.query.filter_by(idempotency_key=idempotency_key).first()


def _replay(idempotency_key, customer_id):
    existing = find_payment(idempotency_key)
    if existing is not None and existing.customer_id != customer_id:
        raise IdempotencyConflict(idempotency_key)
    return existing


def apply_payment(customer_id, amount, actor, notes=None, idempotency_key=None, at=None):
    """
    Apply a payment to a customer's balance and append it to the ledger.

    Returns ``(transaction, replayed)``. ``replayed`` is True when the
    idempotency key was already used for this customer and the earlier
    transaction is returned unchanged. The transaction is None when the
    customer does not exist. Amounts are taken as given: overpayment drives
    the due negative.
    """
    with customer_locks.hold(customer_id):
        existing = _replay(idempotency_key, customer_id)
        if existing is not None:
            logger.info("Replayed payment %s for key %s", existing.id, idempotency_key)
            return existing, True

        customer = (
            db.session.query(Customer)
            .filter(Customer.id == customer_id)
            .with_for_update()
            .populate_existing()
            .one_or_none()
        )
        if customer is None:
            logger.warning("Payment for unknown customer %s ignored", customer_id)
            return None, False

        due_before = customer.total_due
        remaining = due_before - amount

        txn = Transaction(
            customer_id=customer.id,
            collector_id=actor.id,
            collector_name=actor.name,
            collector_role=actor.role,
            amount_paid=amount,
            payment_type=classify_payment(amount, due_before),
            date=at or datetime.utcnow(),
            remaining_due_after=remaining,
            notes=notes,
            idempotency_key=idempotency_key or None,
        )

        try:
            customer.total_due = remaining
            db.session.add(txn)
            db.session.flush()
            log_change("Transaction", txn.id, "payment", {
                "customer_id": customer.id,
                "amount_paid": amount,
                "remaining_due_after": remaining,
            }, actor_id=actor.id)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            # a concurrent request committed the same key first
            existing = _replay(idempotency_key, customer_id)
            if existing is None:
                raise
            logger.info("Replayed payment %s for key %s", existing.id, idempotency_key)
            return existing, True
        except Exception:
            db.session.rollback()
            raise

    logger.info(
        "Recorded %s payment %s of %s for customer %s by %s (due %s -> %s)",
        txn.payment_type, txn.id, amount, customer_id, actor.name, due_before, remaining,
    )
    return txn, False


def record_payment(customer_id, amount, actor, notes=None, idempotency_key=None, at=None):
    """Like apply_payment, returning only the transaction."""
    txn, _ = apply_payment(customer_id, amount, actor, notes=notes,
                           idempotency_key=idempotency_key, at=at)
    return txn


def get_ledger(customer_id, ledger_filter=None):
    """Transactions for one customer, newest first, narrowed by the filter."""
    ledger_filter = ledger_filter or LedgerFilter()
    transactions = (
        Transaction.query
        .filter(Transaction.customer_id == customer_id)
        .order_by(Transaction.seq.desc())
        .all()
    )
    return [t for t in transactions if ledger_filter.matches(t)]


def get_transaction(transaction_id):
    return Transaction.query.filter_by(id=transaction_id).first()


def quick_pay_amounts(customer):
    due = customer.total_due
    return {"full": due, "half": due / 2}
