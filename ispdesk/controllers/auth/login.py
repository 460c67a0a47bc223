import logging
from flask_restful import Resource, Api
from flask import request
from flask_jwt_extended import create_access_token
from ispdesk.service.identity import authenticate_pin, greeting
from . import auth_bp

logger = logging.getLogger(__name__)

api = Api(auth_bp)


class Login(Resource):
    def post(self):
        data = request.get_json(silent=True) or {}
        pin = data.get("pin")

        if not pin:
            return {"message": "Access PIN required"}, 400

        actor = authenticate_pin(str(pin))
        if actor is None:
            logger.warning("Rejected login with invalid PIN")
            return {"message": "Invalid Access PIN"}, 401

        access_token = create_access_token(
            identity=actor.id,
            additional_claims={
                "name": actor.name,
                "role": actor.role,
            }
        )
        logger.info("Operator %s (%s) logged in", actor.name, actor.role)

        return {
            "access_token": access_token,
            "user": actor.to_dict(),
            "greeting": greeting(),
        }, 200

api.add_resource(Login, '/login')
