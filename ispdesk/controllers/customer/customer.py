import logging
from flask import request, g
from flask_restful import Resource, Api
from marshmallow import ValidationError
from ispdesk.schemas.customer_schema import (
    CustomerSchema, CustomerCreateSchema, CustomerUpdateSchema,
    CustomerStatusSchema, CustomerQuerySchema,
)
from ispdesk.schemas.transaction_schema import TransactionSchema, LedgerQuerySchema
from ispdesk.service import ledger
from ispdesk.service.ledger import LedgerFilter
from ispdesk.service.reminders import reminder_link
from . import customer_bp
from ispdesk.utils.decorators import role_required
from ispdesk.utils.roles import ROLE_ADMIN, ROLE_AGENT

logger = logging.getLogger(__name__)

api = Api(customer_bp)

customer_schema = CustomerSchema()
customers_schema = CustomerSchema(many=True)
customer_create_schema = CustomerCreateSchema()
customer_update_schema = CustomerUpdateSchema()
customer_status_schema = CustomerStatusSchema()
customer_query_schema = CustomerQuerySchema()
transactions_schema = TransactionSchema(many=True)
ledger_query_schema = LedgerQuerySchema()


def can_access_customer(user, customer):
    """
    Admins see every subscriber; field agents only those who still owe.
    """
    if user.role == ROLE_ADMIN:
        return True
    if user.role == ROLE_AGENT:
        return customer.total_due > 0
    return False


def _load_visible(customer_id):
    customer = ledger.get_customer(customer_id)
    if customer is None:
        return None, ({"message": "Customer not found"}, 404)
    if not can_access_customer(g.current_user, customer):
        return None, ({"message": "Access denied"}, 403)
    return customer, None


class CustomerListResource(Resource):

    @role_required(ROLE_ADMIN, ROLE_AGENT)
    def get(self):
        try:
            args = customer_query_schema.load(request.args.to_dict())
        except ValidationError as err:
            return {"errors": err.messages}, 400

        customers = ledger.list_customers(
            search=args["search"],
            status=args["status"],
            only_pending=g.current_user.role == ROLE_AGENT,
        )
        return {"customers": customers_schema.dump(customers)}, 200

    @role_required(ROLE_ADMIN)
    def post(self):
        try:
            data = customer_create_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return {"errors": err.messages}, 400

        customer = ledger.create_customer(data, actor=g.current_user)
        return {"customer": customer_schema.dump(customer)}, 201


class CustomerResource(Resource):

    @role_required(ROLE_ADMIN, ROLE_AGENT)
    def get(self, customer_id):
        customer, error = _load_visible(customer_id)
        if error:
            return error
        return {"customer": customer_schema.dump(customer)}, 200

    @role_required(ROLE_ADMIN)
    def put(self, customer_id):
        try:
            data = customer_update_schema.load(request.get_json(silent=True) or {}, partial=True)
        except ValidationError as err:
            return {"errors": err.messages}, 400

        customer = ledger.update_customer(customer_id, data, actor=g.current_user)
        if customer is None:
            return {"message": "Customer not found"}, 404
        return {"customer": customer_schema.dump(customer)}, 200


class CustomerStatusResource(Resource):

    @role_required(ROLE_ADMIN)
    def patch(self, customer_id):
        try:
            data = customer_status_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return {"errors": err.messages}, 400

        customer = ledger.update_customer_status(customer_id, data["status"], actor=g.current_user)
        if customer is None:
            return {"message": "Customer not found"}, 404
        return {"customer": customer_schema.dump(customer)}, 200


class CustomerLedgerResource(Resource):

    @role_required(ROLE_ADMIN, ROLE_AGENT)
    def get(self, customer_id):
        customer, error = _load_visible(customer_id)
        if error:
            return error

        try:
            args = ledger_query_schema.load(request.args.to_dict())
        except ValidationError as err:
            return {"errors": err.messages}, 400

        transactions = ledger.get_ledger(customer.id, LedgerFilter(**args))
        return {
            "customer": customer_schema.dump(customer),
            "transactions": transactions_schema.dump(transactions),
        }, 200


class QuickPayResource(Resource):

    @role_required(ROLE_ADMIN, ROLE_AGENT)
    def get(self, customer_id):
        customer, error = _load_visible(customer_id)
        if error:
            return error
        return ledger.quick_pay_amounts(customer), 200


class ReminderResource(Resource):

    @role_required(ROLE_ADMIN, ROLE_AGENT)
    def get(self, customer_id):
        customer, error = _load_visible(customer_id)
        if error:
            return error
        return reminder_link(customer), 200


api.add_resource(CustomerListResource, "/customers")
api.add_resource(CustomerResource, "/customers/<string:customer_id>")
api.add_resource(CustomerStatusResource, "/customers/<string:customer_id>/status")
api.add_resource(CustomerLedgerResource, "/customers/<string:customer_id>/ledger")
api.add_resource(QuickPayResource, "/customers/<string:customer_id>/quick-pay")
api.add_resource(ReminderResource, "/customers/<string:customer_id>/reminder")
