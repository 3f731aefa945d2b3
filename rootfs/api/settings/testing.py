from api.settings.production import *  # noqa

# A boolean that turns on/off debug mode.
# https://docs.djangoproject.com/en/4.2/ref/settings/#debug
DEBUG = True

# If set to True, Django's normal exception handling of view functions
# will be suppressed, and exceptions will propagate upwards
# https://docs.djangoproject.com/en/4.2/ref/settings/#debug-propagate-exceptions
DEBUG_PROPAGATE_EXCEPTIONS = True

SECRET_KEY = 'bluegreen-testing-key'

# Kubernetes and the route store for testing, both are mocked
KUBERNETES_API_SERVER = 'http://test-kubernetes.example.com'
K8S_API_VERIFY_TLS = False
ROUTING_API_URL = 'http://test-routestore.example.com'

ROUTE_NAMESPACE = 'default'
ROUTE_NAME = 'sample-route'
ROUTING_POOLS = ('blue', 'green')
ROUTING_BACKEND_PORT = 80
ROUTING_DEFAULT_POOL_POLICY = 'implicit'
ROUTING_WRITE_METHOD = 'patch'
ROUTING_CALLER_IDENTITY = None
ROUTING_TIMEOUT = 5
ROUTING_HEADER_MAPPINGS = None
