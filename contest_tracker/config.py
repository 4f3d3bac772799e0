import os


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


class BaseConfig:
    """Base configuration shared across all environments."""

    # Flask core
    SECRET_KEY = os.environ.get('SECRET_KEY', 'fallback-secret-key-change-me')
    WTF_CSRF_ENABLED = True

    # Upstream contest sources
    CONTEST_API_BASE_URL = os.environ.get(
        'CONTEST_API_BASE_URL', 'http://localhost:3000'
    )
    SOURCE_TIMEOUT = float(os.environ.get('SOURCE_TIMEOUT', '10'))
    SOURCE_MAX_RETRIES = int(os.environ.get('SOURCE_MAX_RETRIES', '2'))
    SOURCE_MAX_WORKERS = int(os.environ.get('SOURCE_MAX_WORKERS', '3'))
    SOURCE_ORDER = [
        name.strip().lower()
        for name in os.environ.get('SOURCE_ORDER', 'codechef,codeforces,leetcode').split(',')
        if name.strip()
    ]

    # Listing
    COMPLETED_PER_PLATFORM = int(os.environ.get('COMPLETED_PER_PLATFORM', '3'))
    DISPLAY_TIMEZONE_OFFSET = float(os.environ.get('DISPLAY_TIMEZONE_OFFSET', '0'))

    # Bookmarks
    BOOKMARK_COOKIE_NAME = os.environ.get('BOOKMARK_COOKIE_NAME', 'bookmarks')
    BOOKMARK_COOKIE_MAX_AGE = int(
        os.environ.get('BOOKMARK_COOKIE_MAX_AGE', str(365 * 24 * 3600))
    )
    BOOKMARK_MAX_ITEMS = int(os.environ.get('BOOKMARK_MAX_ITEMS', '50'))
    BOOKMARK_COOKIE_MAX_BYTES = int(os.environ.get('BOOKMARK_COOKIE_MAX_BYTES', '3800'))

    # Logging
    LOG_FILE_MAX_BYTES = int(os.environ.get('LOG_FILE_MAX_BYTES', '0'))
    LOG_FILE_BACKUP_COUNT = int(os.environ.get('LOG_FILE_BACKUP_COUNT', '3'))
    LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


class DevelopmentConfig(BaseConfig):
    """Development environment configuration."""

    DEBUG = True


class ProductionConfig(BaseConfig):
    """Production environment configuration."""

    DEBUG = False
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE', 'true')
    LOG_FILE_MAX_BYTES = int(
        os.environ.get('LOG_FILE_MAX_BYTES', str(10 * 1024 * 1024))
    )


class TestingConfig(BaseConfig):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True
    WTF_CSRF_ENABLED = False
    SECRET_KEY = 'test-secret-key'
    CONTEST_API_BASE_URL = 'http://contests.test'
    SOURCE_MAX_RETRIES = 1
    SOURCE_TIMEOUT = 1.0
    COMPLETED_PER_PLATFORM = 3
    LOG_FILE_MAX_BYTES = 0
    SERVER_NAME = 'localhost'


config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}
