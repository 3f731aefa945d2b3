"""
The local routing intent: an ordered list of header match rules plus the pool
that receives everything no rule matches.
"""
import copy
import itertools
from dataclasses import dataclass, field

from routing.exceptions import ValidationError

POOL_BLUE = "blue"
POOL_GREEN = "green"
DEFAULT_POOLS = (POOL_BLUE, POOL_GREEN)
RULE_FIELDS = ("header", "value", "target")


@dataclass
class RoutingRule:
    id: int = field(compare=False)
    header: str = ""
    value: str = ""
    target: str = ""
    # the remote rule this one was decoded from, carried so encode keeps
    # match dimensions, filters and backend fields it does not model
    source: dict = field(default=None, compare=False, repr=False)

    def is_valid(self):
        return bool(self.header) and bool(self.value) and bool(self.target)


@dataclass
class RoutingConfig:
    default_pool: str = POOL_BLUE
    rules: list = field(default_factory=list)
    pools: tuple = field(default=DEFAULT_POOLS, compare=False)

    def __post_init__(self):
        self.pools = tuple(self.pools)
        self._check_pool(self.default_pool)
        start = max([rule.id for rule in self.rules if isinstance(rule.id, int)], default=0)
        self._ids = itertools.count(start + 1)

    def __len__(self):
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def _check_pool(self, pool):
        if pool not in self.pools:
            raise ValidationError("unknown pool {}, expected one of: {}".format(
                pool, ", ".join(self.pools)))

    def load_rule(self, header, value, target, source=None):
        """Append a rule as read from the store, incomplete rules included."""
        rule = RoutingRule(next(self._ids), header, value, target, source)
        self.rules.append(rule)
        return rule

    def get_rule(self, rule_id):
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None

    def add_rule(self, header, value, target=POOL_BLUE):
        if not header or not value:
            raise ValidationError("Header and value required")
        self._check_pool(target)
        return self.load_rule(header, value, target)

    def update_rule(self, rule_id, **patch):
        unknown = set(patch) - set(RULE_FIELDS)
        if unknown:
            raise ValidationError("unknown rule field: {}".format(", ".join(sorted(unknown))))
        if "target" in patch:
            self._check_pool(patch["target"])
        rule = self.get_rule(rule_id)
        if rule is None:
            return None
        for name, value in patch.items():
            setattr(rule, name, value)
        return rule

    def remove_rule(self, rule_id):
        self.rules = [rule for rule in self.rules if rule.id != rule_id]

    def set_default_pool(self, pool):
        self._check_pool(pool)
        self.default_pool = pool

    def switch_all_to_pool(self, pool):
        """Send all traffic to one pool, dropping every header override."""
        self._check_pool(pool)
        self.rules, self.default_pool = [], pool

    def rollback_to(self, pool=POOL_BLUE):
        """Point the default route back at ``pool``, removed rules stay removed."""
        self.set_default_pool(pool)

    def is_valid(self):
        return all(rule.is_valid() for rule in self.rules)

    def copy(self):
        return RoutingConfig(
            self.default_pool, copy.deepcopy(self.rules), self.pools)
