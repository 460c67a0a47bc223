from ispdesk.extension import ma
from ispdesk.models import ChangeLog


class ChangeLogSchema(ma.SQLAlchemyAutoSchema):
    timestamp = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")

    class Meta:
        model = ChangeLog
        dump_only = ("id", "timestamp")
