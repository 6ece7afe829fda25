import os
from datetime import timedelta


def _is_production() -> bool:
    env = os.getenv('APP_ENV') or os.getenv('NODE_ENV') or ''
    return env.lower() == 'production'


class Config:
    SECRET_KEY = os.getenv('SESSION_SECRET') or os.getenv('SECRET_KEY', 'dev-session-secret')

    # session cookie carries only the signed session payload (Flask-Login user id + flashes)
    SESSION_COOKIE_NAME = 'sid'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = _is_production()
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)

    THEME_COOKIE_NAME = 'theme'
    THEME_COOKIE_MAX_AGE = int(timedelta(days=90).total_seconds())

    MONGODB_URI = os.getenv('MONGODB_URI', '')
    MONGODB_DB = os.getenv('MONGODB_DB', 'course')
    MONGODB_COLLECTION = os.getenv('MONGODB_COLLECTION', 'mongoarticles')
    MONGODB_TIMEOUT_MS = int(os.getenv('MONGODB_TIMEOUT_MS', '3000'))

    # 'text' -> DELETE answers 200 with a description, anything else -> 204
    DELETE_MODE = 'text' if os.getenv('DELETE_MODE') == 'text' else '204'

    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '3000'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
