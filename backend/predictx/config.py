import os
from datetime import timedelta
from pathlib import Path
from dotenv import load_dotenv

# Load .env from the package directory or the backend directory
env_path = Path(__file__).parent / '.env'
if not env_path.exists():
    env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or SECRET_KEY
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get('JWT_EXPIRES_HOURS', 24)))
    MONGO_URI = os.getenv('MONGO_URI', 'mongodb://localhost:27017/predictx')
    WTF_CSRF_ENABLED = False

    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:5173,http://localhost:8080').split(',')

    # Hardcoded admin credential for the admin panel
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', 'admin123')

    # New users get Rs. 5000 as bonus
    SIGNUP_BONUS = float(os.environ.get('SIGNUP_BONUS', 5000))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_JSON = os.environ.get('LOG_JSON', 'false').lower() == 'true'

    MAIL_ENABLED = os.environ.get('MAIL_ENABLED', 'false').lower() == 'true'
    MAIL_SERVER = 'smtp.gmail.com'
    MAIL_PORT = 587
    MAIL_USE_TLS = True
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER', 'noreply@predictx.local')


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret-key-with-enough-length'
    MONGO_URI = 'mongodb://localhost:27017/predictx_test'
    MAIL_SUPPRESS_SEND = True
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = 'WARNING'
