"""Data models for junk checking."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class LookupStatus(str, Enum):
    """Outcome of a single DNSBL query."""

    BLOCKED = "blocked"
    NOT_BLOCKED = "not_blocked"
    LOOKUP_FAILED = "lookup_failed"


@dataclass
class LookupResult:
    """Result of a single DNSBL query."""

    query: str  # Full query name (e.g. 1.2.0.192.zen.spamhaus.org)
    blocklist: str  # Block list name (e.g. Spamhaus/zen)
    status: LookupStatus
    return_code: str = ""  # DNS answer (e.g. 127.0.0.2)
    reason: str = ""  # Listing reason, or failure reason for LOOKUP_FAILED
    elapsed_ms: int = 0
    check_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def blocked(self) -> bool:
        """Failed lookups count as not blocked (fail-open)."""
        return self.status is LookupStatus.BLOCKED


@dataclass(frozen=True)
class RelayHost:
    """Relay host taken from a Received header."""

    name: str  # Lowercase host name, or address without brackets
    literal: bool = False  # Was written as [address]

    @classmethod
    def parse(cls, host: str) -> "RelayHost":
        """Parse "mail.example.com" or "[192.0.2.1]" / "[IPv6:2001:db8::1]"."""
        host = host.strip().lower()
        if len(host) >= 2 and host.startswith("[") and host.endswith("]"):
            address = host[1:-1]
            if address.startswith("ipv6:"):
                address = address[len("ipv6:"):]
            return cls(name=address, literal=True)
        return cls(name=host)

    def __str__(self) -> str:
        return f"[{self.name}]" if self.literal else self.name
