import os
from dotenv import load_dotenv

# Load .env at config import time (safe for dev/local)
load_dotenv()

class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///xendit_gateway.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Xendit secret API key (set via env in production, encrypted at rest by the host)
    XENDIT_API_KEY = os.environ.get("XENDIT_API_KEY")
    XENDIT_API_URL = os.environ.get("XENDIT_API_URL", "https://api.xendit.co")
    # Host platform callback base, e.g. https://billing.example.com/callback/gw/
    GW_CALLBACK_URL = os.environ.get("GW_CALLBACK_URL")
    COMPANY_ID = os.environ.get("COMPANY_ID", "1")

class DevConfig(Config):
    DEBUG = True

class ProdConfig(Config):
    DEBUG = False

class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    XENDIT_API_KEY = "xnd_development_test"
    XENDIT_API_URL = "https://api.xendit.test"
    GW_CALLBACK_URL = "https://billing.example.com/callback/gw/"
    COMPANY_ID = "1"
