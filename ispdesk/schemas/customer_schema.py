from marshmallow import Schema, fields, validate
from ispdesk.extension import ma
from ispdesk.models import Customer
from ispdesk.models.customer import CustomerStatus


class CustomerSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Customer
        load_instance = False

    last_billed_date = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


class CustomerCreateSchema(Schema):
    name = fields.Str(required=True, validate=validate.Length(min=1))
    phone = fields.Str(required=True, validate=validate.Length(min=1))
    address = fields.Str(load_default="")
    monthly_plan_amount = fields.Float(required=True, validate=validate.Range(min=0))
    due_day = fields.Int(load_default=1, validate=validate.Range(min=1, max=31))
    photo = fields.Str(allow_none=True)


class CustomerUpdateSchema(CustomerCreateSchema):
    # Explicit balance correction by an administrator.
    total_due = fields.Float()


class CustomerStatusSchema(Schema):
    status = fields.Str(required=True, validate=validate.OneOf(CustomerStatus.ALL))


class CustomerQuerySchema(Schema):
    search = fields.Str(load_default="")
    status = fields.Str(load_default="", validate=validate.OneOf(("",) + CustomerStatus.ALL))
