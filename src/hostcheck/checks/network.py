"""Network checks: ports, interfaces, routing, DNS and connectivity."""

import re
import socket
import time
from pathlib import Path

import psutil

from hostcheck.checks.base import (
    check,
    is_integer,
    parse_duration,
    parse_int,
    read_table,
    source_column,
)
from hostcheck.core.diagnostic import PASS, Outcome, generic_error
from hostcheck.core.errors import (
    ParameterError,
    SourceUnavailable,
    UnsupportedValue,
)
from hostcheck.core.log import logger
from hostcheck.core.source import CommandSource, FileSource, SourceReader
from hostcheck.tabular import WHITESPACE, column

PROC_NET_TCP = FileSource(Path("/proc/net/tcp"))
ROUTE = CommandSource("route", ("-n",))

_PORT_RE = re.compile(r":([0-9A-F]{4})")

# `route -n` columns
ROUTE_DESTINATION = 0
ROUTE_GATEWAY = 1
ROUTE_IFACE = 7

NO_GATEWAY = "0.0.0.0"

MAX_PORT = 65535

# ---------------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------------


def get_open_ports(reader: SourceReader | None = None) -> list[int]:
    """Local ports of every socket listed in /proc/net/tcp."""
    ports = []
    for address in source_column(PROC_NET_TCP, 1, WHITESPACE, reader):
        match = _PORT_RE.search(address)
        if match:
            ports.append(int(match.group(1), 16))
    return ports


@check("Port", "port")
def port(parameters: list[str], reader=None) -> Outcome:
    """The TCP port is open on this host."""
    wanted = parse_int(parameters[0])
    open_ports = get_open_ports(reader)
    if wanted in open_ports:
        return PASS
    return generic_error(
        "Port not open", str(wanted), [str(p) for p in open_ports]
    )


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

_FAMILIES = {4: socket.AF_INET, 6: socket.AF_INET6}


def get_interface_addresses() -> dict[str, list]:
    """Addresses of every network interface, keyed by name."""
    try:
        return psutil.net_if_addrs()
    except OSError as e:
        raise SourceUnavailable(
            f"Could not read network interfaces:\n\t{e}"
        ) from e


def get_up_interfaces() -> list[str]:
    try:
        stats = psutil.net_if_stats()
    except OSError as e:
        raise SourceUnavailable(
            f"Could not read network interface status:\n\t{e}"
        ) from e
    return [name for name, stat in stats.items() if stat.isup]


def get_interface_ips(name: str, version: int) -> list[str]:
    """IP addresses of one interface for IP version 4 or 6.

    Returns an empty list when the interface does not exist.

    Raises:
        UnsupportedValue: If version is neither 4 nor 6
    """
    if version not in _FAMILIES:
        raise UnsupportedValue(f"Unsupported IP version: {version}")
    family = _FAMILIES[version]
    return [
        # IPv6 link-local addresses carry a "%zone" suffix
        address.address.split("%")[0]
        for address in get_interface_addresses().get(name, [])
        if address.family == family
    ]


@check("Interface", "interface")
def interface(parameters: list[str], reader=None) -> Outcome:
    """The network interface exists."""
    name = parameters[0]
    names = list(get_interface_addresses())
    if name in names:
        return PASS
    return generic_error("Interface does not exist", name, names)


@check("Up", "interface")
def up(parameters: list[str], reader=None) -> Outcome:
    """The network interface is up."""
    name = parameters[0]
    up_interfaces = get_up_interfaces()
    if name in up_interfaces:
        return PASS
    return generic_error("Interface is not up", name, up_interfaces)


def interface_has_ip(name: str, address: str, version: int) -> Outcome:
    ips = get_interface_ips(name, version)
    if address in ips:
        return PASS
    return generic_error(
        f"Interface {name} does not have IP", address, ips
    )


@check("Ip4", "interface", "address")
def ip4(parameters: list[str], reader=None) -> Outcome:
    """The interface has this IPv4 address."""
    return interface_has_ip(parameters[0], parameters[1], 4)


@check("Ip6", "interface", "address")
def ip6(parameters: list[str], reader=None) -> Outcome:
    """The interface has this IPv6 address."""
    return interface_has_ip(parameters[0], parameters[1], 6)


# ---------------------------------------------------------------------------
# Routing table
# ---------------------------------------------------------------------------


def routing_table(reader: SourceReader | None = None) -> list[list[str]]:
    """Rows of `route -n`, without its title and header lines."""
    return read_table(ROUTE, WHITESPACE, reader)[2:]


def routing_table_column(
    index: int, reader: SourceReader | None = None
) -> list[str]:
    return column(routing_table(reader), index)


def default_gateway(reader: SourceReader | None = None) -> list[str] | None:
    """First routing row with a non-zero gateway, if any."""
    for row in routing_table(reader):
        if len(row) > ROUTE_GATEWAY and row[ROUTE_GATEWAY] != NO_GATEWAY:
            return row
    return None


@check("Gateway", "address")
def gateway(parameters: list[str], reader=None) -> Outcome:
    """The default gateway has this IP address."""
    address = parameters[0]
    row = default_gateway(reader)
    actual = row[ROUTE_GATEWAY] if row else NO_GATEWAY
    if address == actual:
        return PASS
    return generic_error("Gateway does not have address", address, [actual])


@check("GatewayInterface", "interface")
def gateway_interface(parameters: list[str], reader=None) -> Outcome:
    """The default gateway operates on this interface."""
    name = parameters[0]
    row = default_gateway(reader)
    actual = row[ROUTE_IFACE] if row and len(row) > ROUTE_IFACE else ""
    if name == actual:
        return PASS
    return generic_error(
        "Default gateway does not operate on interface",
        name,
        [actual] if actual else [],
    )


def routing_table_match(index: int, value: str, reader=None) -> Outcome:
    values = routing_table_column(index, reader)
    if value in values:
        return PASS
    return generic_error("Not found in routing table", value, values)


@check("RoutingTableDestination", "address")
def routing_table_destination(parameters: list[str], reader=None) -> Outcome:
    """The address is a destination in the kernel routing table."""
    return routing_table_match(ROUTE_DESTINATION, parameters[0], reader)


@check("RoutingTableInterface", "interface")
def routing_table_interface(parameters: list[str], reader=None) -> Outcome:
    """The interface appears in the kernel routing table."""
    return routing_table_match(ROUTE_IFACE, parameters[0], reader)


@check("RoutingTableGateway", "address")
def routing_table_gateway(parameters: list[str], reader=None) -> Outcome:
    """The address is a gateway in the kernel routing table."""
    return routing_table_match(ROUTE_GATEWAY, parameters[0], reader)


# ---------------------------------------------------------------------------
# DNS and connectivity
# ---------------------------------------------------------------------------


def resolvable(host: str) -> bool:
    try:
        socket.getaddrinfo(host, None)
    except (socket.gaierror, UnicodeError):
        return False
    return True


@check("Host", "host")
def host(parameters: list[str], reader=None) -> Outcome:
    """The host name can be resolved."""
    name = parameters[0]
    if resolvable(name):
        return PASS
    return generic_error("Host cannot be resolved", name, [])


def split_host_port(address: str) -> tuple[str, int]:
    """Split "host:port" or "[v6addr]:port".

    Raises:
        ParameterError: If there is no decimal port in 0-65535
    """
    host_part, sep, port_part = address.rpartition(":")
    if (
        not sep
        or not host_part
        or not is_integer(port_part, signed=False)
        or int(port_part) > MAX_PORT
    ):
        raise ParameterError(f"Could not parse address: {address}")
    if host_part.startswith("[") and host_part.endswith("]"):
        host_part = host_part[1:-1]
    return host_part, int(port_part)


_SOCKET_TYPES = {"TCP": socket.SOCK_STREAM, "UDP": socket.SOCK_DGRAM}


def can_connect(address: str, protocol: str, timeout: float) -> bool:
    """Try one connection to `address` over TCP or UDP.

    A timeout of zero leaves the operating system's default
    connect behavior in place. A positive timeout bounds all
    attempts together, not each resolved address separately.

    Raises:
        UnsupportedValue: If protocol is not TCP or UDP
        ParameterError: If the address cannot be parsed
    """
    if protocol not in _SOCKET_TYPES:
        raise UnsupportedValue(f"Unsupported protocol: {protocol}")
    host_name, port_number = split_host_port(address)
    try:
        candidates = socket.getaddrinfo(
            host_name, port_number, type=_SOCKET_TYPES[protocol]
        )
    except (socket.gaierror, UnicodeError) as e:
        logger.debug("Could not resolve address", address=address, error=str(e))
        return False

    deadline = time.monotonic() + timeout if timeout > 0 else None
    for family, sock_type, proto, _, sockaddr in candidates:
        remaining = None
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.debug("Connection timeout spent", address=address)
                break
        try:
            with socket.socket(family, sock_type, proto) as sock:
                sock.settimeout(remaining)
                sock.connect(sockaddr)
                return True
        except OSError as e:
            logger.debug(
                "Connection attempt failed",
                address=address,
                protocol=protocol,
                error=str(e),
            )
    return False


def connection_check(address: str, protocol: str, timeout: str) -> Outcome:
    if can_connect(address, protocol, parse_duration(timeout)):
        return PASS
    return generic_error(f"Could not connect over {protocol}", address, [])


@check("TCP", "address")
def tcp(parameters: list[str], reader=None) -> Outcome:
    """A TCP connection to host:port succeeds."""
    return connection_check(parameters[0], "TCP", "0ns")


@check("UDP", "address")
def udp(parameters: list[str], reader=None) -> Outcome:
    """A UDP socket can be connected to host:port."""
    return connection_check(parameters[0], "UDP", "0ns")


@check("TCPTimeout", "address", "timeout")
def tcp_timeout(parameters: list[str], reader=None) -> Outcome:
    """Like TCP, giving up after the timeout (e.g. "5s")."""
    return connection_check(parameters[0], "TCP", parameters[1])


@check("UDPTimeout", "address", "timeout")
def udp_timeout(parameters: list[str], reader=None) -> Outcome:
    """Like UDP, giving up after the timeout (e.g. "5s")."""
    return connection_check(parameters[0], "UDP", parameters[1])
