from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from routing import get_synchronizer
from routing.exceptions import RoutingException


class Command(BaseCommand):
    """Management command for shifting traffic between the blue and green pools"""

    help = "Show or change the header rules and default pool of the managed HTTPRoute."

    def add_arguments(self, parser):
        parser.add_argument("--namespace", default=settings.ROUTE_NAMESPACE)
        parser.add_argument("--name", default=settings.ROUTE_NAME)
        parser.add_argument("--user", default=None, help="sent as X-User with every write")
        parser.add_argument("--token", default=None, help="bearer token for the route store")
        actions = parser.add_subparsers(dest="action", required=True)

        actions.add_parser("show", help="print the default pool and the rules")

        add = actions.add_parser("add", help="append a header rule")
        add.add_argument("header")
        add.add_argument("value")
        add.add_argument("--target", default=settings.ROUTING_POOLS[-1])

        update = actions.add_parser("update", help="change fields of a rule")
        update.add_argument("id", type=int)
        update.add_argument("--header")
        update.add_argument("--value")
        update.add_argument("--target")

        remove = actions.add_parser("remove", help="delete a rule")
        remove.add_argument("id", type=int)

        default = actions.add_parser("default", help="set the default pool")
        default.add_argument("pool")

        switch = actions.add_parser(
            "switch", help="send all traffic to one pool and drop every rule")
        switch.add_argument("pool")

        rollback = actions.add_parser(
            "rollback", help="point the default pool back, rules are not restored")
        rollback.add_argument("pool", nargs="?", default=settings.ROUTING_POOLS[0])

    def show(self, sync, namespace, name, **options):
        config, _ = sync.fetch(namespace, name)
        self.write_config(sync, config)

    def add(self, sync, namespace, name, header, value, target, **options):
        return sync.add_rule(namespace, name, header, value, target)

    def update(self, sync, namespace, name, id, **options):
        patch = {field: options[field] for field in ("header", "value", "target")
                 if options.get(field) is not None}
        return sync.update_rule(namespace, name, id, **patch)

    def remove(self, sync, namespace, name, id, **options):
        return sync.remove_rule(namespace, name, id)

    def default(self, sync, namespace, name, pool, **options):
        return sync.set_default_pool(namespace, name, pool)

    def switch(self, sync, namespace, name, pool, **options):
        return sync.switch_all_to_pool(namespace, name, pool)

    def rollback(self, sync, namespace, name, pool, **options):
        return sync.rollback_to(namespace, name, pool)

    def write_config(self, sync, config):
        self.stdout.write("Default: {}".format(config.default_pool))
        if not config.rules:
            self.stdout.write("No rules defined")
        for rule in config:
            self.stdout.write("{:>3}  {} ({}) = {} -> {}".format(
                rule.id,
                rule.header,
                sync.codec.translator.to_actual(rule.header),
                rule.value,
                rule.target,
            ))

    def handle(self, *args, **options):
        action = options.pop("action")
        sync = get_synchronizer(token=options.pop("token"), user=options.pop("user"))
        try:
            stored = getattr(self, action)(sync, **options)
        except RoutingException as e:
            raise CommandError(str(e)) from e
        if stored is not None:
            self.stdout.write(self.style.SUCCESS("Routing updated"))
            config = sync.codec.decode(stored, sync.fallback_pool)
            self.write_config(sync, config)
            pool = options.get("pool")
            if pool is not None and config.default_pool != pool:
                self.stderr.write(self.style.WARNING(
                    "Default pool reads back as {}, not {}: with the {} policy the default "
                    "pool is only stored through the first rule. Set "
                    "ROUTING_DEFAULT_POOL_POLICY=catch-all to store it explicitly.".format(
                        config.default_pool, pool, sync.codec.policy)))
