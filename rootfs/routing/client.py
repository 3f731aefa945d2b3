"""
HTTP client for the route store, the service that reads and writes HTTPRoute
documents on the gateway's behalf.
"""
import logging
import requests
import requests.exceptions
from requests_toolbelt import user_agent
from urllib.parse import quote, urljoin

from api import __version__ as bluegreen_version
from routing.codec import RemoteRouteResource
from routing.exceptions import ConflictError, DecodeError, RetrievalError, \
    TransportError, WriteError

logger = logging.getLogger(__name__)


def static_credentials(token):
    """A credential provider that always hands out the same bearer token."""
    return lambda: token


def no_credentials():
    return None


def new_session():
    session = requests.Session()
    session.headers = {
        # https://toolbelt.readthedocs.org/en/latest/user-agent.html#user-agent-constructor
        'User-Agent': user_agent('Bluegreen Routing', bluegreen_version),
        'Accept': 'application/json',
    }
    # retries belong to whoever drives the read-modify-write cycle, not here
    session.mount('http://', requests.adapters.HTTPAdapter(max_retries=0))
    session.mount('https://', requests.adapters.HTTPAdapter(max_retries=0))
    return session


class RouteClient(object):
    """
    Read, replace and merge-patch one HTTPRoute held by the route store.

    ``credentials`` is called before every request and may return a bearer
    token or ``None``. Missing credentials are not an error here, the store
    decides what an anonymous caller may do.
    """

    def __init__(self, base_url, credentials=None, timeout=30, session=None):
        self.base_url = base_url.rstrip('/') + '/'
        self.credentials = credentials or no_credentials
        self.timeout = timeout
        self.session = session or new_session()

    def path(self, namespace, name):
        return "httproute/{}/{}".format(quote(namespace, safe=''), quote(name, safe=''))

    def headers(self, user=None, content_type=None):
        headers = {}
        if content_type is not None:
            headers['Content-Type'] = content_type
        if user:
            headers['X-User'] = user
        token = self.credentials()
        if token:
            headers['Authorization'] = 'Bearer ' + token
        return headers

    def request(self, method, namespace, name, **kwargs):
        url = urljoin(self.base_url, self.path(namespace, name))
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as err:
            message = "There was a problem reaching the route store. " \
                      "Method: {}, URL: {}".format(method, url)
            logger.error(message)
            raise TransportError(message) from err
        except requests.exceptions.RequestException as err:
            raise TransportError(str(err)) from err

    @staticmethod
    def unhealthy(status_code):
        return not 200 <= status_code <= 299

    @staticmethod
    def resource(response):
        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError("route store returned invalid JSON: {}".format(e)) from e
        return RemoteRouteResource.from_dict(data)

    def get(self, namespace, name):
        response = self.request('GET', namespace, name, headers=self.headers())
        if self.unhealthy(response.status_code):
            logger.info("[%s/%s]: get failed with %s", namespace, name, response.status_code)
            raise RetrievalError(response)
        return self.resource(response)

    def _write(self, method, namespace, name, body, content_type, user):
        response = self.request(
            method, namespace, name,
            json=body,
            headers=self.headers(user, content_type),
        )
        if self.unhealthy(response.status_code):
            logger.info("[%s/%s]: %s failed with %s",
                        namespace, name, method.lower(), response.status_code)
            if response.status_code == 409:
                raise ConflictError(response)
            raise WriteError(response)
        return self.resource(response)

    def put(self, namespace, name, resource, user=None):
        """Replace the whole route document."""
        return self._write(
            'PUT', namespace, name, resource.to_dict(), 'application/json', user)

    def patch(self, namespace, name, spec_fragment, user=None):
        """Merge ``spec_fragment`` into the route's ``spec``."""
        return self._write(
            'PATCH', namespace, name, {"spec": spec_fragment},
            'application/merge-patch+json', user)
