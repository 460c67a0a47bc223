from ispdesk.controllers.auth import auth_bp
from ispdesk.controllers.customer import customer_bp
from ispdesk.controllers.payment import payment_bp
from ispdesk.controllers.dashboard import dashboard_bp
from ispdesk.controllers.export import export_bp
from ispdesk.controllers.changelog import changelog_bp

def register_routes(app):
    app.register_blueprint(auth_bp)
    app.register_blueprint(customer_bp)
    app.register_blueprint(payment_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(export_bp)
    app.register_blueprint(changelog_bp)
