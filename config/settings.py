"""
Django settings for the catalog project.
"""
from pathlib import Path
from decouple import config, Csv

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = config('SECRET_KEY', default='django-insecure-change-me')
DEBUG = config('DEBUG', default=False, cast=bool)
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'catalog',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': config('DATABASE_PATH', default=str(BASE_DIR / 'db.sqlite3')),
        # Les workers du batch écrivent en parallèle
        'OPTIONS': {'timeout': 20},
        # Base de test sur fichier : la base en mémoire partagée se verrouille entre threads
        'TEST': {'NAME': config('TEST_DATABASE_PATH', default=str(BASE_DIR / 'test_db.sqlite3'))},
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
MEDIA_URL = '/media/'
MEDIA_ROOT = config('MEDIA_ROOT', default=str(BASE_DIR / 'media'))

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# ---------------------------------------------------------
# Population du catalogue (vitrine -> CMS)
# ---------------------------------------------------------
POPULATE_LISTING_URL = config('POPULATE_LISTING_URL', default='https://www.gog.com/games/ajax/filtered')
POPULATE_DETAIL_URL = config('POPULATE_DETAIL_URL', default='https://www.gog.com/game/{slug}')
POPULATE_UPLOAD_URL = config('POPULATE_UPLOAD_URL', default='http://127.0.0.1:8000/api/upload')
POPULATE_UPLOAD_TOKEN = config('POPULATE_UPLOAD_TOKEN', default='')

POPULATE_LIMIT = config('POPULATE_LIMIT', default=50, cast=int)
POPULATE_GALLERY_LIMIT = config('POPULATE_GALLERY_LIMIT', default=5, cast=int)
POPULATE_WORKERS = config('POPULATE_WORKERS', default=4, cast=int)

# Requêtes par seconde vers la vitrine et l'upload (0 = pas de limite)
POPULATE_RATE = config('POPULATE_RATE', default=2.0, cast=float)
POPULATE_HTTP_TIMEOUT = config('POPULATE_HTTP_TIMEOUT', default=15, cast=int)
POPULATE_MAX_RETRIES = config('POPULATE_MAX_RETRIES', default=3, cast=int)
POPULATE_PERSIST_FAILURES = config('POPULATE_PERSIST_FAILURES', default=True, cast=bool)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '{asctime} {levelname} {name}: {message}', 'style': '{'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'simple'},
    },
    'loggers': {
        'catalog': {
            'handlers': ['console'],
            'level': config('CATALOG_LOG_LEVEL', default='INFO'),
        },
    },
}
