"""Tests for the check contract: registry and parameter parsing."""

import pytest

from hostcheck.checks import CheckRegistry, parse_duration, parse_int, registry
from hostcheck.checks.base import CheckDefinition
from hostcheck.core.diagnostic import PASS, generic_error
from hostcheck.core.errors import ParameterError, UnknownCheck


@pytest.mark.parametrize("value, expected", [
    ("8080", 8080),
    ("0", 0),
    ("-1", -1),
    ("+27", 27),
    ("007", 7),
])
def test_parse_int(value, expected):
    assert parse_int(value) == expected


@pytest.mark.parametrize("value", [
    "", " 22", "22 ", "1_000", "0x1F", "8080a", "3.0", "twelve",
])
def test_parse_int_is_strict(value):
    with pytest.raises(ParameterError, match="Could not parse integer"):
        parse_int(value)


@pytest.mark.parametrize("value, seconds", [
    ("0", 0.0),
    ("0ns", 0.0),
    ("5s", 5.0),
    ("500ms", 0.5),
    ("1m30s", 90.0),
    ("1.5h", 5400.0),
    ("250us", 0.00025),
])
def test_parse_duration(value, seconds):
    assert parse_duration(value) == pytest.approx(seconds)


@pytest.mark.parametrize("value", ["", "5", "s", "5 s", "5sec", "1.2.3s", "ms5"])
def test_parse_duration_rejects_malformed(value):
    with pytest.raises(ParameterError, match="Could not parse duration"):
        parse_duration(value)


def _echo(parameters, reader=None):
    if parameters[0] == "yes":
        return PASS
    return generic_error("Said no", "yes", parameters)


@pytest.fixture
def local_registry():
    reg = CheckRegistry()
    reg.register(CheckDefinition("Echo", _echo, ("answer",), "Says yes"))
    return reg


def test_registry_runs_check(local_registry):
    assert local_registry.run("Echo", ["yes"]) == PASS
    assert local_registry.run("Echo", ["no"]).exit_code == 1


def test_registry_rejects_wrong_parameter_count(local_registry):
    with pytest.raises(ParameterError, match="takes 1 parameter"):
        local_registry.run("Echo", [])
    with pytest.raises(ParameterError):
        local_registry.run("Echo", ["yes", "extra"])


def test_registry_unknown_check(local_registry):
    with pytest.raises(UnknownCheck, match="Nope"):
        local_registry.run("Nope", [])


def test_registry_rejects_duplicates(local_registry):
    with pytest.raises(ValueError, match="already registered"):
        local_registry.register(CheckDefinition("Echo", _echo, ("answer",)))


def test_global_registry_has_every_check():
    expected = {
        "DockerImage", "DockerRunning",
        "GroupExists", "UserInGroup", "GroupId",
        "UserExists", "UserHasUID", "UserHasGID", "UserHasUsername",
        "UserHasName", "UserHasHomeDir",
        "Port", "Interface", "Up", "Ip4", "Ip6", "Gateway",
        "GatewayInterface", "Host", "TCP", "UDP", "TCPTimeout",
        "UDPTimeout", "RoutingTableDestination", "RoutingTableInterface",
        "RoutingTableGateway",
    }

    assert expected == set(registry.names())


def test_registered_checks_describe_themselves():
    for definition in registry.definitions():
        assert definition.description, definition.name
