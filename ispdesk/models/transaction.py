from datetime import datetime
from ispdesk.extension import db
from ispdesk.utils.ids import new_id


class PaymentType:
    FULL = "Full"
    PART = "Part"

    ALL = (FULL, PART)


class Transaction(db.Model):
    """
    One recorded payment. Rows are written once by the ledger engine and
    never updated; the collector fields are a copy of the actor at the
    moment of recording, not a reference.
    """

    __tablename__ = "transactions"

    # Insertion order; the ledger is read newest-first on this column.
    seq = db.Column(db.Integer, primary_key=True, autoincrement=True)
    id = db.Column(db.String(32), unique=True, nullable=False, index=True, default=new_id)
    customer_id = db.Column(db.String(32), db.ForeignKey("customers.id"), nullable=False, index=True)
    collector_id = db.Column(db.String(64), nullable=False)
    collector_name = db.Column(db.String, nullable=False)
    collector_role = db.Column(db.String(16), nullable=False)
    amount_paid = db.Column(db.Float, nullable=False)
    payment_type = db.Column(db.String(8), nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    remaining_due_after = db.Column(db.Float, nullable=False)
    notes = db.Column(db.Text)
    idempotency_key = db.Column(db.String(128), unique=True)

    # Relationships
    customer = db.relationship("Customer", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction {self.id} {self.payment_type} {self.amount_paid}>"
