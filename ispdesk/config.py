import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///ispdesk.db")
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Let auth errors reach the JWT handlers instead of flask-restful.
    PROPAGATE_EXCEPTIONS = True

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "fallback-secret-key")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=12)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"

    # Fixed operator PINs; there is no user directory.
    ADMIN_PIN = os.getenv("ADMIN_PIN", "1234")
    AGENT_PIN = os.getenv("AGENT_PIN", "0000")
    ADMIN_NAME = os.getenv("ADMIN_NAME", "Vinod")
    AGENT_NAME = os.getenv("AGENT_NAME", "Subhajit")

    BUSINESS_NAME = os.getenv("BUSINESS_NAME", "Intech Broadband")
    CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "Rs.")

    CORS_ORIGINS = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    SEED_DEMO_DATA = True
    AUTO_MIGRATE = False
