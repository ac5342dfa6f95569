"""Address helpers for reverse-IP DNSBL queries."""

import ipaddress

from .models import RelayHost
from .resolver import IPAddress, Resolver, ResolverError

# Site-local / private ranges. Documentation ranges (192.0.2.0/24...) are not exempt.
PRIVATE_NETWORKS = [
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("fec0::/10"),
    ipaddress.ip_network("fc00::/7"),
]


def unmap(address: IPAddress) -> IPAddress:
    """IPv4-mapped IPv6 (::ffff:192.0.2.1) to plain IPv4, anything else unchanged."""
    mapped = getattr(address, "ipv4_mapped", None)
    return address if mapped is None else mapped


def is_exempt(address: IPAddress) -> bool:
    """Check if an address must never be sent to a public reputation service."""
    address = unmap(address)
    if address.is_loopback or address.is_link_local or address.is_multicast:
        return True
    return any(
        address.version == network.version and address in network
        for network in PRIVATE_NETWORKS
    )


def reverse_name(address: IPAddress) -> str:
    """Reverse an address for a DNSBL query (without the zone).

    IPv4: 192.0.2.1 -> 1.2.0.192
    IPv6: one label per nibble, last byte first, low nibble before high nibble.
    """
    address = unmap(address)
    packed = address.packed
    if address.version == 4:
        return ".".join(str(b) for b in reversed(packed))

    labels: list[str] = []
    for b in reversed(packed):
        labels.append(f"{b & 0xF:x}")
        labels.append(f"{b >> 4:x}")
    return ".".join(labels)


def host_addresses(host: RelayHost, resolver: Resolver) -> list[IPAddress]:
    """Addresses a relay host denotes: the literal itself, or the resolved set."""
    if host.literal:
        try:
            return [ipaddress.ip_address(host.name)]
        except ValueError as e:
            raise ResolverError(f"Invalid address literal {host}") from e
    return resolver.resolve_addresses(host.name)
