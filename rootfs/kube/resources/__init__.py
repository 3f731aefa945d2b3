from kube import KubeHTTPClient


class ResourceRegistry(type):
    """A registry of all Resources subclassed"""
    def __init__(cls, name, bases, attrs):
        if not hasattr(cls, 'plugins'):
            cls.plugins = []
        elif not attrs.get('abstract', False):
            cls.plugins.append(cls)

    def __iter__(cls):
        return iter(cls.plugins)


class Resource(KubeHTTPClient, metaclass=ResourceRegistry):
    abstract = True
    short_name = None

    def __init__(self, url, k8s_api_verify_tls=True, token=None, session=None):
        self.url = url
        self.k8s_api_verify_tls = k8s_api_verify_tls
        self.token = token
        self.session = session
        self.resource_mapping = {}


from .httproute import HTTPRoute  # noqa
