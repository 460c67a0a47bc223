from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from io import BytesIO
from datetime import datetime


def generate_receipt_pdf(details):
    """
    Generate a payment receipt PDF.

    Args:
        details (dict): Pre-formatted receipt fields (strings).

    Returns:
        BytesIO: PDF buffer
    """
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    margin = 50
    line_height = 18

    y = height - margin
    c.setFont("Helvetica-Bold", 16)
    c.drawString(margin, y, details.get("business_name", ""))
    y -= 24
    c.setFont("Helvetica-Bold", 13)
    c.drawString(margin, y, f"Payment Receipt: {details.get('receipt_number', 'N/A')}")
    y -= 30

    c.setFont("Helvetica", 12)
    rows = [
        ("Date", details.get("date", "N/A")),
        ("Subscriber", details.get("customer_name", "N/A")),
        ("Phone", details.get("customer_phone", "N/A")),
        ("Address", details.get("customer_address", "")),
        ("Amount Paid", details.get("amount_paid", "0.00")),
        ("Payment Type", details.get("payment_type", "N/A")),
        ("Balance After", details.get("remaining_due_after", "0.00")),
        ("Collected By", f"{details.get('collector_name', 'N/A')} ({details.get('collector_role', '')})"),
    ]
    if details.get("notes"):
        rows.append(("Notes", details["notes"]))

    for label, value in rows:
        c.drawString(margin, y, f"{label}:")
        c.drawString(margin + 120, y, str(value))
        y -= line_height

    y -= 10
    generated_at = details.get("generated_at", datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S"))
    c.setFont("Helvetica-Oblique", 9)
    c.drawString(margin, y, f"Generated At: {generated_at}")

    c.showPage()
    c.save()
    buffer.seek(0)
    return buffer
