"""
    Network name resolution for target computers.
"""
from __future__ import annotations

import ipaddress
import logging
import socket

import psutil

from core.errors import NetworkNameError
from core.models import NetworkName

logger = logging.getLogger(__name__)

LOCAL_ALIASES = {"", ".", "localhost", "127.0.0.1", "::1"}


def _family_to_label(fam: object) -> str:
    """
    Convert a psutil address family into "IPv4", "IPv6", "MAC" or its str().

    MAC families differ per OS (AF_LINK on BSD/macOS, AF_PACKET on Linux) and
    are only recognisable by enum name.
    """
    if fam == socket.AF_INET:
        return "IPv4"
    if fam == socket.AF_INET6:
        return "IPv6"

    name = getattr(fam, "name", None)
    if isinstance(name, str) and ("LINK" in name or "PACKET" in name):
        return "MAC"
    return str(fam)


def local_addresses() -> set[str]:
    """Every IPv4/IPv6 address bound to a local interface."""
    addresses: set[str] = set()
    for addr_list in psutil.net_if_addrs().values():
        for a in addr_list:
            if _family_to_label(a.family) in ("IPv4", "IPv6"):
                # link-local IPv6 comes back as "fe80::1%eth0"
                addresses.add(a.address.split("%", 1)[0].lower())
    return addresses


def _is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def _first_address(host: str) -> str:
    try:
        infos = socket.getaddrinfo(host, None)
    except (socket.gaierror, UnicodeError) as e:
        raise NetworkNameError(host, str(e)) from e
    if not infos:
        raise NetworkNameError(host, "no addresses returned")

    # prefer IPv4 when the host has both
    for family, _, _, _, sockaddr in infos:
        if family == socket.AF_INET:
            return sockaddr[0]
    return infos[0][4][0]


def resolve_network_name(computer_name: str | None) -> NetworkName:
    """
    Resolve a target to its short name, address, FQDN and domain.

    "." / "localhost" / loopback addresses mean this machine. IP literals are
    reverse-resolved when possible and kept as the name otherwise.
    """
    input_name = (computer_name or "").strip()
    local_host = socket.gethostname()

    host = local_host if input_name.lower() in LOCAL_ALIASES else input_name
    ip_address = _first_address(host)

    if _is_ip(host):
        try:
            fqdn = socket.gethostbyaddr(host)[0]
        except (socket.herror, socket.gaierror, OSError):
            logger.debug("No reverse lookup for %s", host)
            fqdn = host
    else:
        fqdn = socket.getfqdn(host)

    if _is_ip(fqdn):
        short_name, domain = fqdn, None
    else:
        short_name, _, domain = fqdn.partition(".")
        domain = domain or None

    is_local = (
        input_name.lower() in LOCAL_ALIASES
        or short_name.lower() == local_host.split(".", 1)[0].lower()
        or ip_address.lower() in local_addresses()
    )

    resolved = NetworkName(
        input_name=input_name or ".",
        computer_name=short_name,
        ip_address=ip_address,
        fqdn=fqdn,
        domain=domain,
        full_computer_name=fqdn,
        is_local=is_local,
    )
    logger.debug("Resolved %r to %s (%s)", input_name, resolved.full_computer_name, ip_address)
    return resolved
