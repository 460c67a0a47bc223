from marshmallow import Schema, fields, validate
from ispdesk.extension import ma
from ispdesk.models import Transaction
from ispdesk.models.transaction import PaymentType
from ispdesk.service.reports import TIME_RANGES
from ispdesk.utils.roles import ALL_ROLES

ISO_DAY = validate.Regexp(r"^(\d{4}-\d{2}-\d{2})?$", error="Use YYYY-MM-DD.")


class TransactionSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Transaction
        include_fk = True
        exclude = ("seq", "idempotency_key")

    date = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    customer_name = fields.Method("get_customer_name", dump_only=True)

    def get_customer_name(self, obj):
        return obj.customer.name if obj.customer else None


class PaymentCreateSchema(Schema):
    customer_id = fields.Str(required=True)
    # Deliberately unbounded: zero, negative and overpayments are recorded as given.
    amount = fields.Float(required=True)
    notes = fields.Str(allow_none=True, load_default=None)
    idempotency_key = fields.Str(allow_none=True, load_default=None,
                                 validate=validate.Length(max=128))


class LedgerQuerySchema(Schema):
    search = fields.Str(load_default="")
    start_date = fields.Str(load_default="", validate=ISO_DAY)
    end_date = fields.Str(load_default="", validate=ISO_DAY)
    payment_type = fields.Str(load_default="", validate=validate.OneOf(("",) + PaymentType.ALL))


class PaymentQuerySchema(Schema):
    time_range = fields.Str(load_default="all", validate=validate.OneOf(TIME_RANGES))
    collector_role = fields.Str(load_default="", validate=validate.OneOf([""] + ALL_ROLES))


class ReportQuerySchema(PaymentQuerySchema):
    report_type = fields.Str(load_default="collections",
                             validate=validate.OneOf(("collections", "dues")))
    time_range = fields.Str(load_default="today", validate=validate.OneOf(TIME_RANGES))
