from flask_restful import Resource, Api
from ispdesk.models import ChangeLog
from . import changelog_bp
from ispdesk.utils.decorators import role_required
from ispdesk.utils.roles import ROLE_ADMIN
from ispdesk.schemas.changelog_schema import ChangeLogSchema

api = Api(changelog_bp)

changelogs_schema = ChangeLogSchema(many=True)


class ChangeLogListResource(Resource):
    @role_required(ROLE_ADMIN)
    def get(self):
        changelogs = (
            ChangeLog.query
            .order_by(ChangeLog.timestamp.desc(), ChangeLog.id.desc())
            .limit(50)
            .all()
        )
        return {"changelogs": changelogs_schema.dump(changelogs)}, 200


api.add_resource(ChangeLogListResource, "/changelog")
