from ispdesk.extension import db
from ispdesk.models.customer import Customer
from ispdesk.models.transaction import Transaction
from ispdesk.models.changelog import ChangeLog

__all__ = ["db", "Customer", "Transaction", "ChangeLog"]
