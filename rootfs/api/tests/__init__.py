import copy
import logging
from os.path import dirname, realpath

from django.test.runner import DiscoverRunner
from rest_framework.test import APISimpleTestCase

K8S_URL = 'http://test-kubernetes.example.com'
HTTPROUTES_URL = K8S_URL + '/apis/gateway.networking.k8s.io/v1/namespaces/{}/httproutes/{}'

SAMPLE_HTTPROUTE = {
    'apiVersion': 'gateway.networking.k8s.io/v1',
    'kind': 'HTTPRoute',
    'metadata': {
        'name': 'sample-route',
        'namespace': 'default',
        'resourceVersion': '4711',
    },
    'spec': {
        'parentRefs': [{'name': 'public-gateway'}],
        'rules': [{
            'matches': [{'headers': [{'name': 'x-nexus-user-id', 'value': '123'}]}],
            'backendRefs': [{'name': 'blue', 'port': 80}],
        }],
    },
}

# Root of the test directory (for files and such)
TEST_ROOT = dirname(realpath(__file__))


def httproute(**metadata):
    """A copy of the sample route with the given metadata fields replaced."""
    data = copy.deepcopy(SAMPLE_HTTPROUTE)
    data['metadata'].update(metadata)
    return data


class SilentDjangoTestSuiteRunner(DiscoverRunner):
    """Prevents api log messages from cluttering the console during tests."""

    def run_tests(self, test_labels, **kwargs):
        """Run tests with all but critical log messages disabled."""
        # hide any log messages less than critical
        logging.disable(logging.ERROR)
        return super(SilentDjangoTestSuiteRunner, self).run_tests(
            test_labels, **kwargs)


class BluegreenTestCase(APISimpleTestCase):
    """Base case for views, Kubernetes is mocked and no database is used."""

    def route_url(self, namespace='default', name='sample-route'):
        return HTTPROUTES_URL.format(namespace, name)
