import logging
from dataclasses import dataclass
from datetime import datetime
from flask import current_app
from ispdesk.utils.roles import ROLE_ADMIN, ROLE_AGENT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    """The authenticated operator. Copied by value into every transaction."""

    id: str
    name: str
    role: str

    def to_dict(self):
        return {"id": self.id, "name": self.name, "role": self.role}


def authenticate_pin(pin):
    """
    Resolve an access PIN to one of the two fixed operators.
    Returns None when the PIN matches neither.
    """
    config = current_app.config
    if not pin:
        return None
    if pin == config["ADMIN_PIN"]:
        return Actor(id="admin", name=config["ADMIN_NAME"], role=ROLE_ADMIN)
    if pin == config["AGENT_PIN"]:
        return Actor(id="agent", name=config["AGENT_NAME"], role=ROLE_AGENT)
    return None


def greeting(now=None):
    hour = (now or datetime.now()).hour
    if 5 <= hour < 12:
        return "Good Morning"
    if 12 <= hour < 16:
        return "Good Afternoon"
    if 16 <= hour < 20:
        return "Good Evening"
    return "Welcome Back"
