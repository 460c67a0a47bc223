# seed.py
import logging
from ispdesk.models import db, Customer
from ispdesk.models.customer import CustomerStatus

logger = logging.getLogger(__name__)

DEMO_CUSTOMERS = [
    {"name": "Abdur Rahman", "phone": "8759114530", "address": "Kaliachak, Malda",
     "monthly_plan_amount": 500, "total_due": 500, "status": CustomerStatus.ACTIVE, "due_day": 1},
    {"name": "John Doe", "phone": "9123456789", "address": "Indiranagar, Bangalore",
     "monthly_plan_amount": 1000, "total_due": 1200, "status": CustomerStatus.ACTIVE, "due_day": 5},
    {"name": "Sadia Sultana", "phone": "9988776655", "address": "DLF Phase 3, Gurgaon",
     "monthly_plan_amount": 800, "total_due": 0, "status": CustomerStatus.SUSPENDED, "due_day": 10},
]


def seed():
    """Load the demo subscribers into an empty customer table."""
    if Customer.query.first() is not None:
        return 0

    db.session.add_all(Customer(**data) for data in DEMO_CUSTOMERS)
    db.session.commit()
    logger.info("Seeded %d demo customers", len(DEMO_CUSTOMERS))
    return len(DEMO_CUSTOMERS)
