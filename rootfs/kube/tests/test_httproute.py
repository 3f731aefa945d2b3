"""
Unit tests for the HTTPRoute calls against the Kubernetes API.
"""
import unittest

import requests
import requests_mock
from packaging.version import Version

from kube import KubeHTTPClient, get_k8s_session
from kube.exceptions import KubeException, KubeHTTPException

K8S_URL = "http://test-kubernetes.example.com"
ROUTE_PATH = "/apis/gateway.networking.k8s.io/v1/namespaces/test-route/httproutes/test-route"


def route(rules=None):
    return {
        "apiVersion": "gateway.networking.k8s.io/v1",
        "kind": "HTTPRoute",
        "metadata": {"name": "test-route", "namespace": "test-route", "resourceVersion": "1"},
        "spec": {"parentRefs": [{"name": "gateway"}], "rules": rules or []},
    }


@requests_mock.Mocker()
class HTTPRouteTest(unittest.TestCase):
    """Tests HTTPRoute calls"""

    def setUp(self):
        self.client = KubeHTTPClient(K8S_URL, False, token="t0ken")

    def test_resource_mapping(self, mock):
        self.assertIs(self.client.httproute, self.client.httproutes)
        self.assertEqual(self.client.httproute.kind, "HTTPRoute")
        with self.assertRaises(AttributeError):
            self.client.tcproutes

    def test_get_http_route(self, mock):
        mock.get(K8S_URL + ROUTE_PATH, json=route())
        response = self.client.httproute.get("test-route", "test-route")
        self.assertEqual(response.json()["metadata"]["resourceVersion"], "1")
        self.assertEqual(mock.last_request.headers["Authorization"], "Bearer t0ken")
        self.assertIn("Bluegreen Route Store", mock.last_request.headers["User-Agent"])

    def test_get_http_routes(self, mock):
        url = K8S_URL + "/apis/gateway.networking.k8s.io/v1/namespaces/test-route/httproutes"
        mock.get(url, json={"items": [route()]})
        response = self.client.httproute.get("test-route")
        self.assertEqual(len(response.json()["items"]), 1)

    def test_get_missing_http_route(self, mock):
        mock.get(K8S_URL + ROUTE_PATH, status_code=404, reason="Not Found", json={
            "kind": "Status",
            "message": 'httproutes.gateway.networking.k8s.io "test-route" not found',
        })
        with self.assertRaises(KubeHTTPException) as ctx:
            self.client.httproute.get("test-route", "test-route")
        self.assertEqual(
            str(ctx.exception),
            'failed to get HTTPRoute test-route: 404 Not Found '
            '(httproutes.gateway.networking.k8s.io "test-route" not found)')
        self.assertFalse(ctx.exception.forbidden)
        response = self.client.httproute.get(
            "test-route", "test-route", ignore_exception=True)
        self.assertEqual(response.status_code, 404)

    def test_forbidden(self, mock):
        mock.get(K8S_URL + ROUTE_PATH, status_code=403, reason="Forbidden", text="denied")
        with self.assertRaises(KubeHTTPException) as ctx:
            self.client.httproute.get("test-route", "test-route")
        self.assertTrue(ctx.exception.forbidden)
        self.assertTrue(str(ctx.exception).endswith("(denied)"))

    def test_update_http_route(self, mock):
        mock.put(K8S_URL + ROUTE_PATH, json=route())
        self.client.httproute.update("test-route", "test-route", route())
        self.assertEqual(mock.last_request.json(), route())
        self.assertEqual(mock.last_request.headers["Content-Type"], "application/json")

    def test_update_conflict(self, mock):
        mock.put(K8S_URL + ROUTE_PATH, status_code=409, reason="Conflict",
                 json={"message": "the object has been modified"})
        with self.assertRaises(KubeHTTPException) as ctx:
            self.client.httproute.update("test-route", "test-route", route())
        self.assertEqual(ctx.exception.response.status_code, 409)
        self.assertIn('update HTTPRoute "test-route" in Namespace "test-route"',
                      str(ctx.exception))
        self.assertTrue(str(ctx.exception).startswith('failed to update HTTPRoute "test-route"'))

    def test_patch_http_route(self, mock):
        mock.patch(K8S_URL + ROUTE_PATH, json=route())
        body = {"spec": {"rules": [{"backendRefs": [{"name": "green", "port": 80}]}]}}
        self.client.httproute.patch("test-route", "test-route", body)
        self.assertEqual(
            mock.last_request.headers["Content-Type"], "application/merge-patch+json")
        self.assertEqual(mock.last_request.json(), body)

    def test_patch_failure_message(self, mock):
        mock.patch(K8S_URL + ROUTE_PATH, status_code=500, reason="Internal Server Error",
                   text="etcd unavailable")
        with self.assertRaises(KubeHTTPException) as ctx:
            self.client.httproute.patch("test-route", "test-route", {"spec": {}})
        self.assertEqual(
            str(ctx.exception),
            'failed to patch HTTPRoute "test-route" in Namespace "test-route": '
            '500 Internal Server Error (etcd unavailable)')

    def test_patch_raw_body(self, mock):
        mock.patch(K8S_URL + ROUTE_PATH, json=route())
        self.client.httproute.patch("test-route", "test-route", b'{"spec": {"rules": []}}')
        self.assertEqual(mock.last_request.body, b'{"spec": {"rules": []}}')

    def test_unreachable_api_server(self, mock):
        mock.get(K8S_URL + ROUTE_PATH, exc=requests.exceptions.ConnectionError)
        with self.assertRaises(KubeException):
            self.client.httproute.get("test-route", "test-route")

    def test_version(self, mock):
        mock.get(K8S_URL + "/version", json={"major": "1", "minor": "29+"})
        self.assertEqual(self.client.version(), Version("1.29"))


class SessionTest(unittest.TestCase):

    def test_token_sessions_are_separate(self):
        first = get_k8s_session(False, "first")
        second = get_k8s_session(False, "second")
        self.assertIsNot(first, second)
        self.assertEqual(first.headers["Authorization"], "Bearer first")
        self.assertEqual(second.headers["Authorization"], "Bearer second")

    def test_service_account_session_is_shared(self):
        self.assertIs(get_k8s_session(False), get_k8s_session(False))
