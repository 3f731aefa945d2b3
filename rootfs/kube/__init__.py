from collections import OrderedDict
import logging
import os
from packaging.version import Version, parse
import requests
import requests.exceptions
from requests_toolbelt import user_agent
import re
from urllib.parse import urljoin

from api import __version__ as bluegreen_version
from kube.exceptions import KubeException, KubeHTTPException


logger = logging.getLogger(__name__)
session = None

SERVICE_ACCOUNT_TOKEN_PATH = '/var/run/secrets/kubernetes.io/serviceaccount/token'
SERVICE_ACCOUNT_CA_PATH = '/var/run/secrets/kubernetes.io/serviceaccount/ca.crt'


def new_k8s_session(k8s_api_verify_tls, token=None):
    s = requests.Session()
    s.headers = {
        'Content-Type': 'application/json',
        'User-Agent': user_agent('Bluegreen Route Store', bluegreen_version)
    }
    if token:
        s.headers['Authorization'] = 'Bearer ' + token
    if k8s_api_verify_tls and os.path.exists(SERVICE_ACCOUNT_CA_PATH):
        s.verify = SERVICE_ACCOUNT_CA_PATH
    else:
        s.verify = k8s_api_verify_tls
    return s


def get_k8s_session(k8s_api_verify_tls, token=None):
    """
    Return a session for the Kubernetes API.

    A caller supplied bearer token gets a session of its own, otherwise the
    pod's service account session is shared by every client.
    """
    global session
    if token:
        return new_k8s_session(k8s_api_verify_tls, token)
    if session is None:
        sa_token = None
        if os.path.exists(SERVICE_ACCOUNT_TOKEN_PATH):
            with open(SERVICE_ACCOUNT_TOKEN_PATH) as token_file:
                sa_token = token_file.read().strip()
        session = new_k8s_session(k8s_api_verify_tls, sa_token)
    return session


class KubeHTTPClient(object):
    api_version = 'v1'
    api_prefix = 'api'

    def __init__(self, url, k8s_api_verify_tls=True, token=None):
        self.url = url
        self.k8s_api_verify_tls = k8s_api_verify_tls
        self.token = token
        self.session = get_k8s_session(self.k8s_api_verify_tls, token)
        self.resource_mapping = OrderedDict()

        # map the various k8s Resources to an internal property
        from kube.resources import Resource  # lazy load
        for res in Resource:
            name = str(res.__name__).lower()  # singular
            component = name + 's'  # make plural
            if component in self.resource_mapping:
                continue

            self.resource_mapping[component] = res(
                self.url, self.k8s_api_verify_tls, token, self.session)
            # map singular Resource name to the plural one
            self.resource_mapping[name] = component
            if res.short_name is not None:
                self.resource_mapping[str(res.short_name).lower()] = component

    def api(self, tmpl, *args):
        """Return a fully-qualified Kubernetes API URL from a string template with args."""
        return "/{}/{}".format(self.api_prefix, self.api_version) + tmpl.format(*args)

    def __getattr__(self, name):
        if name != 'resource_mapping' and name in self.__dict__.get('resource_mapping', {}):
            # resolve to final name if needed
            component = self.resource_mapping[name]
            if type(component) is not str:
                return component

            return self.resource_mapping[component]

        return object.__getattribute__(self, name)

    def version(self):
        """Get Kubernetes version"""
        response = self.http_get('/version')
        if self.unhealthy(response.status_code):
            raise KubeHTTPException(response, 'fetching Kubernetes version')

        data = response.json()
        parsed_version = parse(
            re.sub(r"[^0-9\.]", '', str('{}.{}'.format(data['major'], data['minor']))))
        return Version('{}'.format(parsed_version))

    @staticmethod
    def unhealthy(status_code):
        return not 200 <= status_code <= 299

    @staticmethod
    def log(namespace, message, level='INFO'):
        """Logs a message in the context of a namespace.

        This prefixes log messages with a namespace "tag" so messages about one
        route can be grepped out of the store's output.
        """
        lvl = getattr(logging, level.upper()) if hasattr(logging, level.upper()) else logging.INFO
        logger.log(lvl, "[{}]: {}".format(namespace, message))

    def http_get(self, path, params=None, **kwargs):
        """
        Make a GET request to the k8s server.
        """
        try:
            url = urljoin(self.url, path)
            response = self.session.get(url, params=params, **kwargs)
        except requests.exceptions.ConnectionError as err:
            # reraise as KubeException, but log stacktrace.
            message = "There was a problem retrieving data from " \
                      "the Kubernetes API server. URL: {}, params: {}".format(url, params)
            logger.error(message)
            raise KubeException(message) from err

        return response

    def http_put(self, path, data=None, **kwargs):
        """
        Make a PUT request to the k8s server.
        """
        try:
            url = urljoin(self.url, path)
            response = self.session.put(url, data=data, **kwargs)
        except requests.exceptions.ConnectionError as err:
            message = "There was a problem putting data to " \
                      "the Kubernetes API server. URL: {}, " \
                      "data: {}".format(url, data)
            logger.error(message)
            raise KubeException(message) from err

        return response

    def http_patch(self, path, data=None, **kwargs):
        """
        Make a PATCH request to the k8s server.
        """
        try:
            url = urljoin(self.url, path)
            # accepted media types include:
            # application/json-patch+json,
            # application/merge-patch+json,
            # application/apply-patch+yaml
            response = self.session.patch(url, data=data, **kwargs)
        except requests.exceptions.ConnectionError as err:
            message = "There was a problem patching data to " \
                      "the Kubernetes API server. URL: {}, " \
                      "data: {}".format(url, data)
            logger.error(message)
            raise KubeException(message) from err

        return response


def get_kube_client(token=None):
    """Build a client for the configured API server, optionally acting as a caller's token."""
    from django.conf import settings
    return KubeHTTPClient(settings.KUBERNETES_API_SERVER, settings.K8S_API_VERIFY_TLS, token)
