import logging
import threading
from contextlib import contextmanager

from routing.exceptions import ValidationError
from routing.models import POOL_BLUE, RoutingConfig

logger = logging.getLogger(__name__)

WRITE_PATCH = "patch"
WRITE_PUT = "put"


class KeyedLock(object):
    """
    One lock per ``namespace/name`` so two edits of a route never interleave.

    An entry lives only while some caller holds or waits for it.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}

    def __len__(self):
        with self._guard:
            return len(self._locks)

    @contextmanager
    def __call__(self, key):
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if not entry[1]:
                    del self._locks[key]


class Synchronizer(object):
    """
    Apply local edits to a remote route with a fresh read-modify-write cycle.

    Every change re-reads the route, decodes it, applies the edit, encodes
    the result against the document just read and writes it back. Nothing is
    written unless reading, decoding, the edit and encoding all succeeded.

    The write does not assert ``resourceVersion``: a different process
    writing between our read and our write loses its change. Calls in this
    process are serialized per route.
    """
    locks = KeyedLock()

    def __init__(self, client, codec, user=None, method=WRITE_PATCH, fallback_pool=POOL_BLUE):
        if method not in (WRITE_PATCH, WRITE_PUT):
            raise ValueError("unknown write method: {}".format(method))
        self.client = client
        self.codec = codec
        self.user = user
        self.method = method
        self.fallback_pool = fallback_pool

    @staticmethod
    def log(namespace, name, message, level=logging.INFO):
        logger.log(level, "[{}/{}]: {}".format(namespace, name, message))

    def fetch(self, namespace, name):
        """Read the route and return the decoded config alongside the raw document."""
        resource = self.client.get(namespace, name)
        return self.codec.decode(resource, self.fallback_pool), resource

    def apply_rule_change(self, namespace, name, mutate):
        """
        Run ``mutate`` against the route's current config and store the result.

        ``mutate`` takes the decoded :class:`RoutingConfig` and returns the
        config to write. Returns the document the store answered with; any
        failure is raised as the matching :class:`~routing.exceptions.SyncError`
        or :class:`~routing.exceptions.ValidationError`.
        """
        with self.locks("{}/{}".format(namespace, name)):
            config, resource = self.fetch(namespace, name)
            config = mutate(config)
            if not isinstance(config, RoutingConfig):
                raise ValidationError("rule change must produce a routing config")
            if not config.is_valid():
                raise ValidationError("every rule needs a header, a value and a target")
            desired = self.codec.encode(config, resource)
            if self.method == WRITE_PUT:
                stored = self.client.put(namespace, name, desired, user=self.user)
            else:
                stored = self.client.patch(
                    namespace, name, self.codec.spec_fragment(desired), user=self.user)
            self.log(namespace, name, "routing updated: {} rule(s), default pool {}".format(
                len(config), config.default_pool))
            return stored

    def _apply(self, namespace, name, change):
        def mutate(config):
            change(config)
            return config
        return self.apply_rule_change(namespace, name, mutate)

    def add_rule(self, namespace, name, header, value, target=POOL_BLUE):
        return self._apply(namespace, name, lambda c: c.add_rule(header, value, target))

    def update_rule(self, namespace, name, rule_id, **patch):
        return self._apply(namespace, name, lambda c: c.update_rule(rule_id, **patch))

    def remove_rule(self, namespace, name, rule_id):
        return self._apply(namespace, name, lambda c: c.remove_rule(rule_id))

    def set_default_pool(self, namespace, name, pool):
        return self._apply(namespace, name, lambda c: c.set_default_pool(pool))

    def switch_all_to_pool(self, namespace, name, pool):
        return self._apply(namespace, name, lambda c: c.switch_all_to_pool(pool))

    def rollback_to(self, namespace, name, pool=POOL_BLUE):
        return self._apply(namespace, name, lambda c: c.rollback_to(pool))
