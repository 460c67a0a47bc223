from flask_restful import Resource, Api
from flask import request
from marshmallow import ValidationError
from ispdesk.schemas.customer_schema import CustomerSchema
from ispdesk.schemas.transaction_schema import ReportQuerySchema
from ispdesk.service.reports import ReportService
from ispdesk.utils.decorators import role_required
from ispdesk.utils.roles import ROLE_ADMIN, ROLE_AGENT
from . import dashboard_bp

api = Api(dashboard_bp)

customers_schema = CustomerSchema(many=True, only=("id", "name", "phone", "total_due", "status"))
report_query_schema = ReportQuerySchema()


class Dashboard(Resource):
    @role_required(ROLE_ADMIN, ROLE_AGENT)
    def get(self):
        stats = ReportService.dashboard_stats()
        stats["top_pending"] = customers_schema.dump(ReportService.pending_customers())
        return stats, 200


class Reports(Resource):
    @role_required(ROLE_ADMIN)
    def get(self):
        try:
            args = report_query_schema.load(request.args.to_dict())
        except ValidationError as err:
            return {"errors": err.messages}, 400

        summary = ReportService.report_summary(
            args["report_type"],
            time_range=args["time_range"],
            collector_role=args["collector_role"] or None,
        )
        return summary, 200


api.add_resource(Dashboard, "/dashboard")
api.add_resource(Reports, "/reports")
