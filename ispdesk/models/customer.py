from datetime import datetime
from ispdesk.extension import db
from ispdesk.utils.ids import new_id


class CustomerStatus:
    ACTIVE = "Active"
    SUSPENDED = "Suspended"
    INACTIVE = "Inactive"

    ALL = (ACTIVE, SUSPENDED, INACTIVE)


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String, nullable=False)
    phone = db.Column(db.String, nullable=False)
    address = db.Column(db.String, nullable=False, default="")
    monthly_plan_amount = db.Column(db.Float, nullable=False, default=0)
    # Signed: goes negative when a subscriber overpays.
    total_due = db.Column(db.Float, nullable=False, default=0)
    status = db.Column(db.String(16), nullable=False, default=CustomerStatus.ACTIVE)
    due_day = db.Column(db.Integer, nullable=False, default=1)
    photo = db.Column(db.Text)
    last_billed_date = db.Column(db.DateTime, default=datetime.utcnow)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    transactions = db.relationship(
        "Transaction",
        back_populates="customer",
        order_by="Transaction.seq.desc()",
        lazy="dynamic",
    )

    def __repr__(self):
        return f"<Customer {self.id} {self.name!r} due={self.total_due}>"
