"""
Django settings for the Bluegreen project.
"""
import os.path
import random
import string


def randstr(k):
    return ''.join(random.choices(string.ascii_lowercase + string.digits, k=k))


BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# A boolean that turns on/off debug mode.
# https://docs.djangoproject.com/en/4.2/ref/settings/#debug
DEBUG = os.environ.get('BLUEGREEN_DEBUG', 'false').lower() == "true"

# If set to True, Django's normal exception handling of view functions
# will be suppressed, and exceptions will propagate upwards
# https://docs.djangoproject.com/en/4.2/ref/settings/#debug-propagate-exceptions
DEBUG_PROPAGATE_EXCEPTIONS = False

# SECURITY: change this to allowed fqdn's to prevent host poisioning attacks
# https://docs.djangoproject.com/en/4.2/ref/settings/#allowed-hosts
ALLOWED_HOSTS = ['*']

TIME_ZONE = os.environ.get('TZ', 'UTC')
LANGUAGE_CODE = 'en-us'
USE_I18N = False
USE_TZ = True

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'django.middleware.common.CommonMiddleware',
    'api.middleware.APIVersionMiddleware',
]

ROOT_URLCONF = 'bluegreen.urls'

# Python dotted path to the WSGI application used by Django's runserver.
WSGI_APPLICATION = 'api.wsgi.application'

INSTALLED_APPS = (
    'django.contrib.auth',
    'django.contrib.contenttypes',
    # Third-party apps
    'corsheaders',
    'gunicorn',
    'rest_framework',
    # Bluegreen apps
    'api',
)

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# the route store keeps no state of its own, Kubernetes is the database
DATABASES = {}

# Security settings
CORS_ORIGIN_ALLOW_ALL = True
CORS_ALLOW_HEADERS = (
    'content-type',
    'x-user',
    'authorization',
)
CORS_ALLOW_METHODS = (
    'GET',
    'PUT',
    'PATCH',
    'OPTIONS',
)

CORS_EXPOSE_HEADERS = (
    'BLUEGREEN_API_VERSION',
    'BLUEGREEN_PLATFORM_VERSION',
)

X_FRAME_OPTIONS = 'DENY'
SECURE_CONTENT_TYPE_NOSNIFF = True

# Honor HTTPS from a trusted proxy
# see https://docs.djangoproject.com/en/4.2/ref/settings/#secure-proxy-ssl-header
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

REST_FRAMEWORK = {
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.AllowAny',
    ),
    # callers are authorized by Kubernetes RBAC with the token they forward
    'DEFAULT_AUTHENTICATION_CLASSES': (),
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
    ),
    'DEFAULT_PARSER_CLASSES': (
        'rest_framework.parsers.JSONParser',
        'api.parsers.MergePatchParser',
    ),
    'TEST_REQUEST_DEFAULT_FORMAT': 'json',
}

# URLs that end with slashes are ugly
APPEND_SLASH = False

# See http://docs.djangoproject.com/en/dev/topics/logging for
# more details on how to customize your logging configuration.
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'root': {'level': 'DEBUG' if DEBUG else 'WARN'},
    'formatters': {
        'verbose': {
            'format': '%(levelname)s %(asctime)s %(module)s %(process)d %(thread)d %(message)s'
        },
        'simple': {
            'format': '%(levelname)s %(message)s'
        },
    },
    'filters': {
        'require_debug_false': {
            '()': 'django.utils.log.RequireDebugFalse'
        },
        'require_debug_true': {
            '()': 'django.utils.log.RequireDebugTrue'
        }
    },
    'handlers': {
        'null': {
            'level': 'DEBUG',
            'class': 'logging.NullHandler',
        },
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'simple'
        }
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'filters': ['require_debug_true'],
            'propagate': True,
        },
        'django.request': {
            'handlers': ['console'],
            'level': 'WARNING',
            'filters': ['require_debug_true'],
            'propagate': True,
        },
        'api': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': True,
        },
        'kube': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': True,
        },
        'routing': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': True,
        },
    }
}
TEST_RUNNER = 'api.tests.SilentDjangoTestSuiteRunner'

# Django secret key
SECRET_KEY = os.environ.get('BLUEGREEN_SECRET_KEY', randstr(64))

# Kubernetes API server the route store talks to
# 1. KUBERNETES_API_SERVER (explicit override)
# 2. in-cluster service env vars
# 3. a local apiserver
if os.environ.get('KUBERNETES_API_SERVER'):
    KUBERNETES_API_SERVER = os.environ['KUBERNETES_API_SERVER']
elif os.environ.get('KUBERNETES_SERVICE_HOST') and os.environ.get('KUBERNETES_SERVICE_PORT'):
    KUBERNETES_API_SERVER = "https://{}:{}".format(
        os.environ['KUBERNETES_SERVICE_HOST'],
        os.environ['KUBERNETES_SERVICE_PORT'],
    )
else:
    KUBERNETES_API_SERVER = 'https://127.0.0.1:6443'

K8S_API_VERIFY_TLS = os.environ.get('K8S_API_VERIFY_TLS', 'true').lower() == "true"

# Routing settings, used by the routing package and `manage.py routes`
ROUTING_API_URL = os.environ.get('ROUTING_API_URL', 'http://localhost:8080')
ROUTE_NAMESPACE = os.environ.get('ROUTE_NAMESPACE', 'default')
ROUTE_NAME = os.environ.get('ROUTE_NAME', 'sample-route')
ROUTING_POOLS = tuple(
    pool.strip() for pool in os.environ.get('ROUTING_POOLS', 'blue,green').split(',')
    if pool.strip()
)
ROUTING_BACKEND_PORT = int(os.environ.get('ROUTING_BACKEND_PORT', '80'))
# implicit: the gateway's default backend takes unmatched traffic
# catch-all: a trailing rule without matches points at the default pool
ROUTING_DEFAULT_POOL_POLICY = os.environ.get('ROUTING_DEFAULT_POOL_POLICY', 'implicit')
# patch: merge-patch spec.rules, put: replace the whole document
ROUTING_WRITE_METHOD = os.environ.get('ROUTING_WRITE_METHOD', 'patch')
ROUTING_CALLER_IDENTITY = os.environ.get('ROUTING_CALLER_IDENTITY', None)
ROUTING_TIMEOUT = int(os.environ.get('ROUTING_TIMEOUT', '30'))
# a JSON file holding [{"logical": ..., "actual": ..., "description": ...}]
ROUTING_HEADER_MAPPINGS = os.environ.get('ROUTING_HEADER_MAPPINGS_PATH', None)
