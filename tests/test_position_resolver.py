"""
Unit tests for route parsing, gateway position resolution and the
forwarded-for chain.
"""
import unittest

import pytest

from collabgate.core.error_handling import MalformedRoute, NotOnRoute
from collabgate.routing import GatewayRole, Route, append_forwarded, resolve_position


class TestRoute(unittest.TestCase):
    """Test cases for Route parsing and serialization."""

    def test_parse_splits_on_comma(self):
        route = Route.parse("A,B,C")
        self.assertEqual(route.codes, ("A", "B", "C"))
        self.assertEqual(len(route), 3)

    def test_parse_empty_and_missing(self):
        self.assertFalse(Route.parse(""))
        self.assertFalse(Route.parse(None))
        self.assertEqual(len(Route.parse(None)), 0)

    def test_round_trip(self):
        for codes in [("A",), ("A", "B"), ("CC-BJ", "CC SH", "cc.gz", "Z")]:
            with self.subTest(codes=codes):
                self.assertEqual(Route.parse(str(Route(codes))).codes, codes)

    def test_find_index_first_match(self):
        route = Route.parse("A,B,A")
        self.assertEqual(route.find_index("A"), 0)
        self.assertEqual(route.find_index("B"), 1)
        self.assertIsNone(route.find_index("C"))
        self.assertIsNone(route.find_index("a"))


class TestResolvePosition(unittest.TestCase):
    """Test cases for resolve_position."""

    def setUp(self):
        self.route = Route.parse("A,B,C")

    def test_origin(self):
        position = resolve_position("A", self.route)
        self.assertEqual(position.role, GatewayRole.ORIGIN)
        self.assertEqual(position.next_code, "B")
        self.assertTrue(position.has_next_hop)

    def test_relay(self):
        position = resolve_position("B", self.route)
        self.assertEqual(position.role, GatewayRole.RELAY)
        self.assertEqual(position.next_code, "C")

    def test_destination(self):
        position = resolve_position("C", self.route)
        self.assertEqual(position.role, GatewayRole.DESTINATION)
        self.assertIsNone(position.next_code)
        self.assertFalse(position.has_next_hop)

    def test_not_on_route(self):
        with self.assertRaises(NotOnRoute) as ctx:
            resolve_position("X", self.route)
        self.assertEqual(ctx.exception.center_code, "X")

    def test_empty_route_is_not_on_route(self):
        with self.assertRaises(NotOnRoute):
            resolve_position("A", Route())

    def test_single_element_route_resolves_to_origin(self):
        # Origin test runs before the terminal test
        position = resolve_position("A", Route.parse("A"))
        self.assertEqual(position.role, GatewayRole.ORIGIN)
        self.assertIsNone(position.next_code)
        self.assertFalse(position.has_next_hop)

    def test_every_interior_index_is_relay(self):
        codes = tuple(f"C{i}" for i in range(7))
        route = Route(codes)
        for index in range(1, len(codes) - 1):
            with self.subTest(index=index):
                position = resolve_position(codes[index], route)
                self.assertEqual(position.role, GatewayRole.RELAY)
                self.assertEqual(position.next_code, codes[index + 1])

    def test_two_element_route(self):
        route = Route.parse("A,B")
        self.assertEqual(resolve_position("A", route).next_code, "B")
        self.assertEqual(resolve_position("B", route).role, GatewayRole.DESTINATION)

    def test_empty_next_code_is_malformed(self):
        for text, local in [("A,", "A"), ("A,,C", "A"), ("A,B,,D", "B")]:
            with self.subTest(route=text, local=local):
                with self.assertRaises(MalformedRoute):
                    resolve_position(local, Route.parse(text))

    def test_empty_code_beyond_next_hop_is_ignored(self):
        # Only the code after the local center matters
        position = resolve_position("B", Route.parse("A,B,C,"))
        self.assertEqual(position.next_code, "C")


@pytest.mark.parametrize(
    "existing, role, expected",
    [
        ("", GatewayRole.ORIGIN, "10.0.0.1"),
        ("192.168.1.5", GatewayRole.ORIGIN, "192.168.1.510.0.0.1"),
        ("10.0.0.1", GatewayRole.RELAY, "10.0.0.1,10.0.0.1"),
        ("1.1.1.1,2.2.2.2", GatewayRole.DESTINATION, "1.1.1.1,2.2.2.2,10.0.0.1"),
    ],
)
def test_append_forwarded(existing, role, expected):
    assert append_forwarded(existing, role, "10.0.0.1") == expected


def test_forwarded_chain_grows_by_one_entry_per_hop():
    addresses = ["10.0.0.1", "10.0.0.2", "10.0.0.3", "10.0.0.4"]
    roles = [GatewayRole.ORIGIN, GatewayRole.RELAY, GatewayRole.RELAY, GatewayRole.DESTINATION]

    chain = ""
    for hops, (role, address) in enumerate(zip(roles, addresses), start=1):
        chain = append_forwarded(chain, role, address)
        assert len(chain.split(",")) == hops

    assert chain == ",".join(addresses)
