ROLE_ADMIN = "Admin"
ROLE_AGENT = "Agent"

ALL_ROLES = [ROLE_ADMIN, ROLE_AGENT]
