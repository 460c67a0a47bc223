import logging
from flask_restful import Resource, Api
from flask import request, g
from marshmallow import ValidationError
from ispdesk.schemas.transaction_schema import (
    TransactionSchema, PaymentCreateSchema, PaymentQuerySchema,
)
from ispdesk.service import ledger
from ispdesk.service.ledger import IdempotencyConflict
from ispdesk.service.reports import ReportService
from ispdesk.utils.roles import ROLE_ADMIN, ROLE_AGENT
from ispdesk.utils.decorators import role_required
from ispdesk.controllers.customer.customer import can_access_customer
from . import payment_bp

logger = logging.getLogger(__name__)

api = Api(payment_bp)

# Schemas
transaction_schema = TransactionSchema()
transactions_schema = TransactionSchema(many=True)
payment_create_schema = PaymentCreateSchema()
payment_query_schema = PaymentQuerySchema()


class PaymentListResource(Resource):

    @role_required(ROLE_ADMIN, ROLE_AGENT)
    def get(self):
        try:
            args = payment_query_schema.load(request.args.to_dict())
        except ValidationError as err:
            return {"errors": err.messages}, 400

        transactions = ReportService.list_transactions(
            args["time_range"], collector_role=args["collector_role"] or None
        )
        return {"transactions": transactions_schema.dump(transactions)}, 200

    @role_required(ROLE_ADMIN, ROLE_AGENT)
    def post(self):
        try:
            data = payment_create_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return {"errors": err.messages}, 400

        current_user = g.current_user
        customer = ledger.get_customer(data["customer_id"])
        if customer is None:
            return {"message": "Customer not found"}, 404

        retried = ledger.find_payment(data["idempotency_key"]) is not None
        if not retried and not can_access_customer(current_user, customer):
            return {"message": "Customer has no outstanding due"}, 403

        try:
            txn, replayed = ledger.apply_payment(
                customer.id,
                data["amount"],
                current_user,
                notes=data["notes"],
                idempotency_key=data["idempotency_key"],
            )
        except IdempotencyConflict:
            return {"message": "Idempotency key already used for another customer"}, 409

        if txn is None:
            return {"message": "Customer not found"}, 404

        return transaction_schema.dump(txn), 200 if replayed else 201


class PaymentResource(Resource):

    @role_required(ROLE_ADMIN, ROLE_AGENT)
    def get(self, transaction_id):
        txn = ledger.get_transaction(transaction_id)
        if txn is None:
            return {"message": "Transaction not found"}, 404
        return transaction_schema.dump(txn), 200


api.add_resource(PaymentListResource, "/payments")
api.add_resource(PaymentResource, "/payments/<string:transaction_id>")
