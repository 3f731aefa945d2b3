from kube.resources import Resource
from kube.exceptions import KubeHTTPException


class BaseRoute(Resource):
    abstract = True
    kind = "BaseRoute"
    api_prefix = 'apis'
    api_version = 'gateway.networking.k8s.io/v1'

    def get(self, namespace, name=None, ignore_exception=False, **kwargs):
        """
        Fetch a single Route or a list of Routes
        """
        if name is not None:
            url = self.api("/namespaces/{}/{}s/{}", namespace, self.kind.lower(), name)
            message = 'get %s %s' % (self.kind, name)
        else:
            url = self.api("/namespaces/{}/{}s", namespace, self.kind.lower())
            message = 'get %s' % self.kind

        response = self.http_get(url, params=kwargs or None)
        if not ignore_exception and self.unhealthy(response.status_code):
            raise KubeHTTPException(response, message)

        return response

    def update(self, namespace, name, data, ignore_exception=False):
        """
        Replace a Route with a full document, the document has to carry the
        current resourceVersion or the API server rejects it
        """
        url = self.api("/namespaces/{}/{}s/{}", namespace, self.kind.lower(), name)
        response = self.http_put(url, json=data)
        if not ignore_exception and self.unhealthy(response.status_code):
            raise KubeHTTPException(
                response, 'update {} "{}" in Namespace "{}"', self.kind, name, namespace)
        return response

    def patch(self, namespace, name, data, ignore_exception=False):
        url = self.api("/namespaces/{}/{}s/{}", namespace, self.kind.lower(), name)
        response = self.http_patch(
            url,
            data=data if isinstance(data, (bytes, str)) else None,
            json=None if isinstance(data, (bytes, str)) else data,
            headers={"Content-Type": "application/merge-patch+json"}
        )
        if not ignore_exception and self.unhealthy(response.status_code):
            raise KubeHTTPException(
                response, 'patch {} "{}" in Namespace "{}"', self.kind, name, namespace)
        return response


class HTTPRoute(BaseRoute):
    kind = "HTTPRoute"
