"""
Conversion between a :class:`~routing.models.RoutingConfig` and the HTTPRoute
document the gateway reconciles.

Only ``spec.rules`` is owned by this codec. Everything else in the document
(``metadata``, ``spec.parentRefs``, ``spec.hostnames``, fields added by other
tools) is carried through untouched.

How the default pool is written depends on the codec's policy:

``implicit``
    No rule is emitted for the default pool, the gateway's own default
    backend handles unmatched traffic. On decode the default pool is read
    from the first rule's first backend.

``catch-all``
    A trailing rule without matches points at the default pool. On decode
    that rule becomes the default pool and is not listed as a header rule.
"""
import copy
import logging

from routing.exceptions import DecodeError
from routing.headers import HeaderTranslator
from routing.models import DEFAULT_POOLS, POOL_BLUE, RoutingConfig

logger = logging.getLogger(__name__)

API_VERSION = "gateway.networking.k8s.io/v1"
KIND = "HTTPRoute"
DEFAULT_PORT = 80
POLICY_IMPLICIT = "implicit"
POLICY_CATCH_ALL = "catch-all"
POLICIES = (POLICY_IMPLICIT, POLICY_CATCH_ALL)


def _first(items):
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def _head(container, key):
    """Return ``container[key][0]`` as a dict, creating the list or entry if needed."""
    items = container.get(key)
    if not isinstance(items, list):
        items = container[key] = []
    if not items:
        items.append({})
    elif not isinstance(items[0], dict):
        items[0] = {}
    return items[0]


def _text(value):
    return value if isinstance(value, str) else ""


class RemoteRouteResource(object):
    """A route document as the store returned it, unknown fields included."""

    def __init__(self, data=None):
        self.data = data if data is not None else {}

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise DecodeError("route document must be a JSON object, got {}".format(
                type(data).__name__))
        for key in ("metadata", "spec"):
            if data.get(key) is not None and not isinstance(data[key], dict):
                raise DecodeError("route {} must be a JSON object".format(key))
        rules = (data.get("spec") or {}).get("rules")
        if rules is not None and not isinstance(rules, list):
            raise DecodeError("route spec.rules must be a JSON array")
        return cls(data)

    @classmethod
    def new(cls, namespace, name, parent_refs=None):
        return cls({
            "apiVersion": API_VERSION,
            "kind": KIND,
            "metadata": {"name": name, "namespace": namespace},
            "spec": {"parentRefs": parent_refs or [], "rules": []},
        })

    def __eq__(self, other):
        return isinstance(other, RemoteRouteResource) and self.data == other.data

    def __repr__(self):
        return "<RemoteRouteResource {}/{}>".format(self.namespace, self.name)

    @property
    def metadata(self):
        return self.data.get("metadata") or {}

    @property
    def spec(self):
        return self.data.get("spec") or {}

    @property
    def name(self):
        return self.metadata.get("name")

    @property
    def namespace(self):
        return self.metadata.get("namespace")

    @property
    def resource_version(self):
        return self.metadata.get("resourceVersion")

    @property
    def parent_refs(self):
        return self.spec.get("parentRefs") or []

    @property
    def rules(self):
        return self.spec.get("rules") or []

    def to_dict(self):
        return copy.deepcopy(self.data)


class RouteCodec(object):

    def __init__(self, translator=None, port=DEFAULT_PORT, policy=POLICY_IMPLICIT,
                 pools=DEFAULT_POOLS):
        if policy not in POLICIES:
            raise ValueError("unknown default pool policy: {}".format(policy))
        self.translator = translator or HeaderTranslator()
        self.port = port
        self.policy = policy
        self.pools = tuple(pools)

    def encode_rule(self, rule):
        """
        Build the remote rule for ``rule``.

        A rule decoded from the store is written back on top of its source, so
        only the first header condition and the first backend name change. An
        untouched rule is returned exactly as it was read.
        """
        if isinstance(rule.source, dict):
            remote = copy.deepcopy(rule.source)
            if self.decode_rule(remote) == (rule.header, rule.value, rule.target):
                return remote
        else:
            remote = {}
        header = _head(_head(remote, "matches"), "headers")
        header["name"] = self.translator.to_actual(rule.header)
        header["value"] = rule.value
        backend = _head(remote, "backendRefs")
        backend["name"] = rule.target
        backend.setdefault("port", self.port)
        return remote

    def encode_rules(self, config):
        rules = [self.encode_rule(rule) for rule in config.rules]
        if self.policy == POLICY_CATCH_ALL:
            rules.append({"backendRefs": [{"name": config.default_pool, "port": self.port}]})
        return rules

    def encode(self, config, prior):
        data = prior.to_dict()
        spec = data.get("spec")
        if not isinstance(spec, dict):
            spec = data["spec"] = {}
        spec["rules"] = self.encode_rules(config)
        return RemoteRouteResource(data)

    def spec_fragment(self, resource):
        """The merge-patch body that writes ``resource``'s rules and nothing else."""
        return {"rules": copy.deepcopy(resource.rules)}

    @staticmethod
    def _is_catch_all(rule):
        for match in rule.get("matches") or []:
            if isinstance(match, dict) and match:
                return False
        return True

    def decode_rule(self, rule):
        header = _first(_first(rule.get("matches")).get("headers"))
        backend = _first(rule.get("backendRefs"))
        return (
            self.translator.to_logical(_text(header.get("name"))),
            _text(header.get("value")),
            _text(backend.get("name")),
        )

    def decode(self, resource, fallback_pool=POOL_BLUE):
        remote_rules = [rule if isinstance(rule, dict) else {} for rule in resource.rules]
        default_pool = fallback_pool
        if self.policy == POLICY_CATCH_ALL and remote_rules and \
                self._is_catch_all(remote_rules[-1]):
            name = _first(remote_rules.pop().get("backendRefs")).get("name")
            if name in self.pools:
                default_pool = name
        elif remote_rules:
            name = _first(remote_rules[0].get("backendRefs")).get("name")
            if name in self.pools:
                default_pool = name

        config = RoutingConfig(default_pool, pools=self.pools)
        for rule in remote_rules:
            config.load_rule(*self.decode_rule(rule), source=rule)
        logger.debug("decoded %d rule(s) from %r, default pool %s",
                     len(config), resource, default_pool)
        return config
