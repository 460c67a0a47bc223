from ispdesk.extension import db
from ispdesk.models import ChangeLog
from flask_jwt_extended import get_jwt_identity
from datetime import datetime


def log_change(entity_type, entity_id, action, details=None, actor_id=None):
    if actor_id is None:
        try:
            actor_id = get_jwt_identity()
        except RuntimeError:
            actor_id = None  # In case JWT is not active in this context

    log_entry = ChangeLog(
        entity_type=entity_type,
        entity_id=str(entity_id),
        action=action,
        changed_by=actor_id,
        timestamp=datetime.utcnow(),
        details=details or {}
    )
    db.session.add(log_entry)
    return log_entry
