"""
Views for the route store: read, replace and merge-patch HTTPRoute objects
in the caller's name.
"""
import logging

from django.http import HttpResponse
from django.views.generic import View
from rest_framework.exceptions import ParseError
from rest_framework.parsers import JSONParser
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import ServiceUnavailable
from api.parsers import MergePatchParser
from api.schemas.httproute import SCHEMA as HTTPROUTE_SCHEMA, PATCH_SCHEMA
from api.utils import get_bearer_token, split_path, text_error, validate_json
from kube import KubeException, get_kube_client

logger = logging.getLogger(__name__)

USAGE = "Usage: /httproute/{namespace}/{name}"
FORBIDDEN = "Forbidden: not authorized"


class ReadinessCheckView(APIView):
    """
    Simple readiness check view to determine the Kubernetes API is reachable.
    """

    def get(self, request):
        try:
            get_kube_client().version()
        except KubeException as e:
            logger.error("readiness check failed: %s", e)
            raise ServiceUnavailable("Kubernetes API health check failed") from e

        return HttpResponse("OK")
    head = get


class LivenessCheckView(View):
    """
    Simple liveness check view to determine if the server
    is responding to HTTP requests.
    """

    def get(self, request):
        return HttpResponse("OK")
    head = get


class HTTPRouteView(APIView):
    """
    ``/httproute/{namespace}/{name}`` backed by the Kubernetes API.

    The caller's bearer token is forwarded so Kubernetes RBAC decides what
    the caller may do; without one the store's service account is used.
    """
    authentication_classes = ()
    parser_classes = (JSONParser, MergePatchParser)

    def http_method_not_allowed(self, request, *args, **kwargs):
        return text_error("Method not allowed", 405)

    def handle_exception(self, exc):
        if isinstance(exc, ParseError):
            return text_error("Invalid JSON body: {}".format(exc.detail), 400)
        return super().handle_exception(exc)

    def routes(self, request):
        return get_kube_client(get_bearer_token(request)).httproute

    @staticmethod
    def caller(request):
        return request.headers.get('X-User') or 'unknown'

    @staticmethod
    def forbidden(e):
        return getattr(e, 'forbidden', False)

    def get(self, request, path):
        parts = split_path(path)
        if len(parts) != 2:
            logger.info("GET %s: bad path", request.path)
            return text_error(USAGE, 400)
        namespace, name = parts
        try:
            data = self.routes(request).get(namespace, name).json()
        except KubeException as e:
            if self.forbidden(e):
                logger.info("GET %s: forbidden by k8s RBAC", request.path)
                return text_error(FORBIDDEN, 403)
            logger.info("GET %s: failed to get: %s", request.path, e)
            return text_error("Failed to get HTTP Route: {}".format(e), 404)
        logger.info("GET %s: get successful", request.path)
        return Response(data)

    def put(self, request, path):
        parts = split_path(path)
        if len(parts) != 2:
            logger.info("PUT %s: bad path", request.path)
            return text_error(USAGE, 400)
        namespace, name = parts
        user = self.caller(request)
        body = validate_json(request.data, HTTPROUTE_SCHEMA, ParseError)
        metadata = body.get('metadata')
        if not isinstance(metadata, dict):
            metadata = {}
        metadata['name'], metadata['namespace'] = name, namespace
        routes = self.routes(request)
        try:
            current = routes.get(namespace, name).json()
        except KubeException as e:
            if self.forbidden(e):
                logger.info("PUT %s by %s: forbidden by k8s RBAC", request.path, user)
                return text_error(FORBIDDEN, 403)
            logger.info("PUT %s by %s: failed to get current resource: %s",
                        request.path, user, e)
            return text_error("Failed to get current HTTP Route: {}".format(e), 404)
        # last write wins, the caller's resourceVersion is not asserted
        metadata['resourceVersion'] = current.get('metadata', {}).get('resourceVersion', '')
        body['metadata'] = metadata
        logger.info("PUT %s by %s: updating route with body: %s", request.path, user, body)
        try:
            data = routes.update(namespace, name, body).json()
        except KubeException as e:
            if self.forbidden(e):
                logger.info("PUT %s by %s: forbidden by k8s RBAC", request.path, user)
                return text_error(FORBIDDEN, 403)
            logger.info("PUT %s by %s: failed to update: %s", request.path, user, e)
            return text_error("Failed to update HTTP Route: {}".format(e), 500)
        logger.info("PUT %s by %s: update successful", request.path, user)
        return Response(data)

    def patch(self, request, path):
        parts = split_path(path)
        if len(parts) != 2:
            logger.info("PATCH %s: bad path", request.path)
            return text_error(USAGE, 400)
        namespace, name = parts
        user = self.caller(request)
        body = validate_json(request.data, PATCH_SCHEMA, ParseError)
        logger.info("PATCH %s by %s: patch body: %s", request.path, user, body)
        try:
            data = self.routes(request).patch(namespace, name, body).json()
        except KubeException as e:
            if self.forbidden(e):
                logger.info("PATCH %s by %s: forbidden by k8s RBAC", request.path, user)
                return text_error(FORBIDDEN, 403)
            logger.info("PATCH %s by %s: failed to patch: %s", request.path, user, e)
            return text_error("Failed to patch HTTP Route: {}".format(e), 500)
        logger.info("PATCH %s by %s: patch successful", request.path, user)
        return Response(data)
