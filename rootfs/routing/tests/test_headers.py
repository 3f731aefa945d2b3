"""
Unit tests for the header name translator.
"""
import json
import os
import tempfile
import unittest

from django.core.exceptions import ImproperlyConfigured
from django.test import override_settings

from routing.headers import DEFAULT_HEADER_MAPPINGS, HeaderMapping, HeaderTranslator, \
    load_header_mappings


class HeaderTranslatorTest(unittest.TestCase):

    def setUp(self):
        self.translator = HeaderTranslator()

    def test_shipped_table(self):
        self.assertEqual(self.translator.to_actual("user-id"), "x-nexus-user-id")
        self.assertEqual(self.translator.to_actual("group"), "x-nexus-group")
        self.assertEqual(self.translator.to_actual("host"), "host")
        self.assertEqual(self.translator.to_actual("device-type"), "x-nexus-device-type")
        self.assertEqual(self.translator.to_logical("x-nexus-user-id"), "user-id")

    def test_symmetry(self):
        for mapping in DEFAULT_HEADER_MAPPINGS:
            self.assertEqual(
                self.translator.to_logical(self.translator.to_actual(mapping.logical)),
                mapping.logical)
            self.assertEqual(
                self.translator.to_actual(self.translator.to_logical(mapping.actual)),
                mapping.actual)

    def test_unknown_headers_pass_through(self):
        for name in ("x-canary", "", "User-Id", "x-nexus-user-id-2"):
            self.assertEqual(self.translator.to_actual(name), name)
            self.assertEqual(self.translator.to_logical(name), name)

    def test_describe(self):
        self.assertEqual(self.translator.describe("group"), "User group for routing")
        self.assertIsNone(self.translator.describe("x-canary"))

    def test_duplicate_logical_name(self):
        with self.assertRaises(ImproperlyConfigured):
            HeaderTranslator([
                HeaderMapping("tenant", "x-tenant"),
                HeaderMapping("tenant", "x-tenant-id"),
            ])


class LoadHeaderMappingsTest(unittest.TestCase):

    def test_default(self):
        with override_settings(ROUTING_HEADER_MAPPINGS=None):
            self.assertEqual(load_header_mappings(), DEFAULT_HEADER_MAPPINGS)

    def test_from_list(self):
        mappings = load_header_mappings([{"logical": "tenant", "actual": "x-tenant"}])
        self.assertEqual(mappings, (HeaderMapping("tenant", "x-tenant", None), ))

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "headers.json")
            with open(path, "w") as fd:
                json.dump([{
                    "logical": "region",
                    "actual": "x-region",
                    "description": "Region for routing",
                }], fd)
            with override_settings(ROUTING_HEADER_MAPPINGS=path):
                mappings = load_header_mappings()
        translator = HeaderTranslator(mappings)
        self.assertEqual(translator.to_actual("region"), "x-region")
        # the shipped table is replaced, not extended
        self.assertEqual(translator.to_actual("user-id"), "user-id")

    def test_missing_file(self):
        with self.assertRaises(ImproperlyConfigured):
            load_header_mappings("/nonexistent/headers.json")

    def test_invalid_entry(self):
        with self.assertRaises(ImproperlyConfigured):
            load_header_mappings([{"logical": "tenant"}])
