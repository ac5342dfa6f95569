"""
Name resolution backends.

The checker never talks to the network directly; it goes through a
Resolver so the host's resolver can be swapped for dnspython with explicit
nameservers (or a test double).
"""

import ipaddress
import logging
import socket
from abc import ABC, abstractmethod
from typing import Union

import dns.exception
import dns.resolver

from .config import JunkCheckConfig

logger = logging.getLogger(__name__)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

# getaddrinfo codes meaning "no such name" (EAI_NODATA is missing on some platforms)
_NOT_FOUND_CODES = {
    code
    for code in (
        getattr(socket, "EAI_NONAME", None),
        getattr(socket, "EAI_NODATA", None),
    )
    if code is not None
}


class ResolverError(Exception):
    """Name resolution failed (timeout, network error, bad response...)."""


class NameNotFound(ResolverError):
    """The name does not exist. For DNSBL queries this means "not listed"."""


class Resolver(ABC):
    """Forward name resolution used by the checker."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def lookup(self, name: str) -> list[IPAddress]:
        """
        Resolve a DNSBL query name to its A answers.

        Raises:
            NameNotFound: the name has no answer
            ResolverError: any other resolution fault
        """
        ...

    @abstractmethod
    def resolve_addresses(self, host: str) -> list[IPAddress]:
        """
        Resolve a host name to all of its addresses (IPv4 and IPv6).

        Raises:
            NameNotFound: the host has no addresses
            ResolverError: any other resolution fault
        """
        ...


class DnspythonResolver(Resolver):
    """Resolver backed by dnspython.

    Without explicit nameservers the host configuration (/etc/resolv.conf)
    is used, so queries still go through the system's recursive resolver.
    """

    def __init__(
        self,
        nameservers: list[str] | None = None,
        timeout: float = 5.0,
        lifetime: float = 10.0,
    ):
        super().__init__()
        self._resolver = dns.resolver.Resolver(configure=not nameservers)
        if nameservers:
            self._resolver.nameservers = list(nameservers)
        self._resolver.timeout = timeout
        self._resolver.lifetime = lifetime

    def _query(self, name: str, rdtype: str) -> list[IPAddress]:
        try:
            answers = self._resolver.resolve(name, rdtype)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer) as e:
            raise NameNotFound(name) from e
        except dns.exception.DNSException as e:
            raise ResolverError(f"{rdtype} lookup for {name} failed: {e}") from e

        return [ipaddress.ip_address(rdata.address) for rdata in answers]

    def lookup(self, name: str) -> list[IPAddress]:
        return self._query(name, "A")

    def resolve_addresses(self, host: str) -> list[IPAddress]:
        # An address written without brackets resolves to itself
        try:
            return [ipaddress.ip_address(host)]
        except ValueError:
            pass

        addresses: list[IPAddress] = []
        for rdtype in ("A", "AAAA"):
            try:
                addresses.extend(self._query(host, rdtype))
            except NameNotFound:
                continue

        if not addresses:
            raise NameNotFound(host)
        return addresses


class SystemResolver(Resolver):
    """Resolver using the C library through the socket module."""

    def _fail(self, name: str, error: Exception) -> ResolverError:
        if isinstance(error, socket.herror):
            return NameNotFound(name)
        if isinstance(error, socket.gaierror) and error.errno in _NOT_FOUND_CODES:
            return NameNotFound(name)
        return ResolverError(f"Lookup for {name} failed: {error}")

    def lookup(self, name: str) -> list[IPAddress]:
        try:
            _, _, ips = socket.gethostbyname_ex(name)
        except (OSError, UnicodeError) as e:
            raise self._fail(name, e) from e

        if not ips:
            raise NameNotFound(name)
        return [ipaddress.ip_address(ip) for ip in ips]

    def resolve_addresses(self, host: str) -> list[IPAddress]:
        try:
            infos = socket.getaddrinfo(host, None, proto=socket.IPPROTO_TCP)
        except (OSError, UnicodeError) as e:
            raise self._fail(host, e) from e

        addresses: list[IPAddress] = []
        for _, _, _, _, sockaddr in infos:
            # Drop IPv6 scope ids ("fe80::1%eth0")
            address = ipaddress.ip_address(str(sockaddr[0]).split("%", 1)[0])
            if address not in addresses:
                addresses.append(address)

        if not addresses:
            raise NameNotFound(host)
        return addresses


def create_resolver(config: JunkCheckConfig) -> Resolver:
    """Build the resolver selected by configuration."""
    backend = config.resolver.lower()

    if backend == "system":
        if config.dns_servers:
            logger.warning(
                "JUNKCHECK_DNS_SERVERS is ignored by the system resolver backend"
            )
        return SystemResolver()

    if backend != "dnspython":
        logger.warning(f"Unknown resolver backend '{config.resolver}', using dnspython")

    return DnspythonResolver(
        nameservers=config.dns_servers or None,
        timeout=config.dns_timeout,
        lifetime=config.dns_lifetime,
    )
