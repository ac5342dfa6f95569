"""
Block list variants.

Each variant knows how to turn a relay host into DNSBL query names:
- ReverseIpBlockList: resolve the host, reverse every public address
- DomainBlockList: append the zone to the host name
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator

from ..addresses import host_addresses, is_exempt, reverse_name
from ..models import RelayHost
from ..resolver import IPAddress, Resolver

logger = logging.getLogger(__name__)


class BlockListKind(str, Enum):
    """Query protocol of a block list"""

    REVERSE_IP = "reverse_ip"
    DOMAIN = "domain"


@dataclass(frozen=True)
class BlockList(ABC):
    """A DNSBL provider."""

    id: int
    name: str  # Unique, used as preference key
    zone: str  # DNSBL zone (e.g., zen.spamhaus.org)
    default_enabled: bool
    # Answers meaning "blocked" (empty = any answer is a listing)
    responses: frozenset[IPAddress] = frozenset()
    reasons: dict[str, str] = field(default_factory=dict, compare=False)

    kind: ClassVar[BlockListKind]

    @property
    def numeric(self) -> bool:
        return self.kind is BlockListKind.REVERSE_IP

    def matches(self, answer: IPAddress) -> bool:
        """Check if a DNS answer signals a listing."""
        return not self.responses or answer in self.responses

    def reason(self, return_code: str) -> str:
        return self.reasons.get(return_code, f"Listed ({return_code})")

    @abstractmethod
    def queries(self, host: RelayHost, resolver: Resolver) -> Iterator[str]:
        """
        Yield the DNSBL query names for a host, lazily.

        Raises:
            ResolverError: the host could not be resolved
        """
        ...


@dataclass(frozen=True)
class ReverseIpBlockList(BlockList):
    """Block list queried with reversed address octets/nibbles."""

    kind: ClassVar[BlockListKind] = BlockListKind.REVERSE_IP

    def queries(self, host: RelayHost, resolver: Resolver) -> Iterator[str]:
        for address in host_addresses(host, resolver):
            if is_exempt(address):
                logger.info(f"Skipping local address {address} of {host} for {self.name}")
                continue
            yield f"{reverse_name(address)}.{self.zone}"


@dataclass(frozen=True)
class DomainBlockList(BlockList):
    """Block list queried with the host name itself."""

    kind: ClassVar[BlockListKind] = BlockListKind.DOMAIN

    def queries(self, host: RelayHost, resolver: Resolver) -> Iterator[str]:
        if host.literal:
            logger.debug(f"{self.name} cannot check address literal {host}")
            return
        yield f"{host.name}.{self.zone}"
