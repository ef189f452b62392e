import os

from dotenv import load_dotenv

load_dotenv()


def _flag(name, default="false"):
    return os.environ.get(name, default).lower() in {"1", "true", "yes"}


class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///bloodcare.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Allowed browser origin for CORS
    CLIENT_DOMAIN = os.environ.get("CLIENT_DOMAIN", "http://localhost:5173")
    # Base64-encoded Firebase service account JSON
    FB_SERVICE_KEY = os.environ.get("FB_SERVICE_KEY")
    FIREBASE_CHECK_REVOKED = _flag("FIREBASE_CHECK_REVOKED")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    PORT = int(os.environ.get("PORT", 3000))
    DEBUG = _flag("DEBUG")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    FB_SERVICE_KEY = None
    CLIENT_DOMAIN = "http://localhost"
    LOG_LEVEL = "WARNING"
