from flask_restful import Resource, Api
from flask import g
from ispdesk.utils.decorators import role_required
from . import auth_bp

api = Api(auth_bp)


class Me(Resource):
    @role_required()
    def get(self):
        return {"user": g.current_user.to_dict()}, 200

api.add_resource(Me, '/me')
