import os
from datetime import timedelta

from cachelib import FileSystemCache, SimpleCache
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev_secret_key'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'postgresql://postgres@localhost/rentdrive'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': int(os.environ.get('DB_POOL_SIZE', 10)),
        'pool_pre_ping': True,
        # keeps password hashes out of logged statement errors
        'hide_parameters': True,
    }

    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(BASE_DIR, 'rentdrive', 'static', 'uploads')
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB
    ALLOWED_LICENSE_EXTENSIONS = {'pdf', 'png', 'jpg', 'jpeg'}

    # Server-side sessions: the cookie only carries the session id
    SESSION_TYPE = 'cachelib'
    SESSION_CACHELIB = FileSystemCache(
        cache_dir=os.environ.get('SESSION_DIR') or os.path.join(BASE_DIR, 'flask_session'),
        threshold=500
    )
    SESSION_PERMANENT = True
    SESSION_KEY_PREFIX = 'rentdrive:'
    PERMANENT_SESSION_LIFETIME = timedelta(hours=int(os.environ.get('SESSION_HOURS', 12)))
    SESSION_COOKIE_HTTPONLY = True

    LOG_DIR = os.environ.get('LOG_DIR', 'logs')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test_secret_key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    # sqlite's in-memory pool takes no sizing options
    SQLALCHEMY_ENGINE_OPTIONS = {'hide_parameters': True}
    SESSION_CACHELIB = SimpleCache()
