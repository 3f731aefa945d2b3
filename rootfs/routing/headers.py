"""
Translation between the header names operators pick rules by and the header
names the gateway matches on the wire.
"""
import json
import os
from collections import namedtuple

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


class HeaderMapping(namedtuple('HeaderMapping', ['logical', 'actual', 'description'])):
    __slots__ = ()

    def __new__(cls, logical, actual, description=None):
        return super().__new__(cls, logical, actual, description)


DEFAULT_HEADER_MAPPINGS = (
    HeaderMapping('user-id', 'x-nexus-user-id', 'User identifier for routing'),
    HeaderMapping('group', 'x-nexus-group', 'User group for routing'),
    HeaderMapping('host', 'host', 'Host header for routing'),
    HeaderMapping('device-type', 'x-nexus-device-type', 'Device type for routing'),
)


class HeaderTranslator(object):
    """
    Two way lookup over a static header mapping table.

    Names missing from the table pass through unchanged in both directions,
    so rules can target headers nobody registered yet.
    """

    def __init__(self, mappings=DEFAULT_HEADER_MAPPINGS):
        self._mappings = tuple(mappings)
        self._actual = {}
        self._logical = {}
        for mapping in self._mappings:
            if mapping.logical in self._actual:
                raise ImproperlyConfigured(
                    "duplicate logical header name: {}".format(mapping.logical))
            self._actual[mapping.logical] = mapping.actual
            # first entry wins when two logical names share a wire name
            self._logical.setdefault(mapping.actual, mapping.logical)

    @property
    def mappings(self):
        return self._mappings

    def to_actual(self, logical):
        return self._actual.get(logical, logical)

    def to_logical(self, actual):
        return self._logical.get(actual, actual)

    def describe(self, logical):
        for mapping in self._mappings:
            if mapping.logical == logical:
                return mapping.description
        return None


def parse_header_mappings(items):
    mappings = []
    for item in items:
        if isinstance(item, HeaderMapping):
            mappings.append(item)
            continue
        try:
            mappings.append(HeaderMapping(
                item['logical'], item['actual'], item.get('description')))
        except (KeyError, TypeError) as e:
            raise ImproperlyConfigured(
                "invalid header mapping {!r}: {}".format(item, e)) from e
    return tuple(mappings)


def load_header_mappings(source=None):
    """
    Return the header table from ``source`` or the ``ROUTING_HEADER_MAPPINGS``
    setting, either a list of dicts or a path to a JSON file holding one.
    """
    if source is None:
        source = getattr(settings, 'ROUTING_HEADER_MAPPINGS', None)
    if not source:
        return DEFAULT_HEADER_MAPPINGS
    if isinstance(source, str):
        if not os.path.exists(source):
            raise ImproperlyConfigured("header mapping file not found: {}".format(source))
        with open(source) as fd:
            source = json.load(fd)
    return parse_header_mappings(source)
