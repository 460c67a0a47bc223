from datetime import datetime
from ispdesk.extension import db


class ChangeLog(db.Model):
    __tablename__ = "changelogs"

    id = db.Column(db.Integer, primary_key=True)
    entity_type = db.Column(db.String(50), nullable=False)
    entity_id = db.Column(db.String(64), nullable=False)
    action = db.Column(db.String(50), nullable=False)  # create, update, status, payment
    changed_by = db.Column(db.String(64))
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    details = db.Column(db.JSON, default=dict)
