import logging
from datetime import datetime
from flask_restful import Resource, Api
from flask import request, make_response, current_app
from marshmallow import ValidationError
from ispdesk.schemas.transaction_schema import PaymentQuerySchema
from ispdesk.service import ledger
from ispdesk.service.reports import ReportService
from ispdesk.utils.decorators import role_required
from ispdesk.utils.helper import money
from ispdesk.utils.roles import ROLE_ADMIN, ROLE_AGENT
from ispdesk.utils.pdf_utils import generate_receipt_pdf
from ispdesk.utils.spreadsheet import rows_to_xlsx
from . import export_bp

logger = logging.getLogger(__name__)

api = Api(export_bp)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

COLLECTION_COLUMNS = [
    "Date", "Time", "Subscriber Name", "Amount Paid", "Balance After",
    "Collected By", "Role", "Notes",
]
DUES_COLUMNS = [
    "Subscriber Name", "Phone", "Address", "Monthly Plan", "Total Due", "Due Day", "Status",
]

payment_query_schema = PaymentQuerySchema()


def _attachment(buffer, mimetype, filename):
    response = make_response(buffer.getvalue())
    response.headers['Content-Type'] = mimetype
    response.headers['Content-Disposition'] = f'attachment; filename={filename}'
    return response


class ExportReceipt(Resource):
    @role_required(ROLE_ADMIN, ROLE_AGENT)
    def get(self, transaction_id):
        """
        Export a PDF receipt for one recorded payment.
        """
        txn = ledger.get_transaction(transaction_id)
        if txn is None:
            return {"message": "Transaction not found"}, 404

        symbol = current_app.config["CURRENCY_SYMBOL"]
        customer = txn.customer
        details = {
            "business_name": current_app.config["BUSINESS_NAME"],
            "receipt_number": f"RCPT-{txn.seq:06d}",
            "date": txn.date.strftime("%Y-%m-%d %H:%M"),
            "customer_name": customer.name,
            "customer_phone": customer.phone,
            "customer_address": customer.address,
            "amount_paid": money(txn.amount_paid, symbol),
            "payment_type": txn.payment_type,
            "remaining_due_after": money(txn.remaining_due_after, symbol),
            "collector_name": txn.collector_name,
            "collector_role": txn.collector_role,
            "notes": txn.notes,
        }

        pdf_buffer = generate_receipt_pdf(details)
        return _attachment(pdf_buffer, "application/pdf", f"receipt_{txn.id}.pdf")


class ExportCollections(Resource):
    @role_required(ROLE_ADMIN)
    def get(self):
        try:
            args = payment_query_schema.load(request.args.to_dict())
        except ValidationError as err:
            return {"errors": err.messages}, 400

        transactions = ReportService.list_transactions(
            args["time_range"], collector_role=args["collector_role"] or None
        )
        rows = [
            {
                "Date": t.date.strftime("%Y-%m-%d"),
                "Time": t.date.strftime("%H:%M"),
                "Subscriber Name": t.customer.name if t.customer else "Unknown Sub",
                "Amount Paid": t.amount_paid,
                "Balance After": t.remaining_due_after,
                "Collected By": t.collector_name,
                "Role": t.collector_role,
                "Notes": t.notes or "",
            }
            for t in transactions
        ]
        buffer = rows_to_xlsx(rows, "Collections", columns=COLLECTION_COLUMNS)
        logger.info("Exported %d collection rows (%s)", len(rows), args["time_range"])

        filename = f"collections_{args['time_range']}_{datetime.utcnow():%Y-%m-%d}.xlsx"
        return _attachment(buffer, XLSX_MIMETYPE, filename)


class ExportDues(Resource):
    @role_required(ROLE_ADMIN)
    def get(self):
        rows = [
            {
                "Subscriber Name": c.name,
                "Phone": c.phone,
                "Address": c.address,
                "Monthly Plan": c.monthly_plan_amount,
                "Total Due": c.total_due,
                "Due Day": c.due_day,
                "Status": c.status,
            }
            for c in ReportService.pending_customers()
        ]
        buffer = rows_to_xlsx(rows, "Dues", columns=DUES_COLUMNS)
        logger.info("Exported %d outstanding dues rows", len(rows))

        filename = f"outstanding_dues_{datetime.utcnow():%Y-%m-%d}.xlsx"
        return _attachment(buffer, XLSX_MIMETYPE, filename)


api.add_resource(ExportReceipt, "/export/receipt/<string:transaction_id>")
api.add_resource(ExportCollections, "/export/collections")
api.add_resource(ExportDues, "/export/dues")
