from urllib.parse import quote
from flask import current_app
from ispdesk.service.ledger import amount_text

SHARE_BASE_URL = "https://wa.me"


def reminder_message(customer, business_name, currency):
    return (
        f"*{business_name} Payment Reminder*\n\n"
        f"Dear {customer.name},\n"
        f"This is a friendly reminder that your monthly broadband dues of "
        f"*{currency}{amount_text(customer.total_due)}* are pending. "
        f"Please settle your bill to avoid service interruption.\n\n"
        f"Thank you,\nTeam {business_name}"
    )


def reminder_link(customer):
    """Pre-filled share link; nothing is sent from the server."""
    config = current_app.config
    text = reminder_message(customer, config["BUSINESS_NAME"], config["CURRENCY_SYMBOL"])
    return {
        "customer_id": customer.id,
        "phone": customer.phone,
        "message": text,
        "url": f"{SHARE_BASE_URL}/{customer.phone}?text={quote(text, safe='')}",
    }
