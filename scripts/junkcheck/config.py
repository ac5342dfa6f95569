"""Configuration for the junk checker."""

import os
from dataclasses import dataclass, field


@dataclass
class JunkCheckConfig:
    """Configuration for the junk checker."""

    cache_expiry: float = 3600.0  # Seconds a cached verdict stays valid

    # Resolver backend: "dnspython" or "system" (libc via socket)
    resolver: str = "dnspython"

    # Explicit nameservers for the dnspython backend (empty = /etc/resolv.conf)
    dns_servers: list[str] = field(default_factory=list)
    dns_timeout: float = 5.0
    dns_lifetime: float = 10.0

    # Worker threads for batch classification
    max_workers: int = 20

    # YAML file holding blocklist overrides (empty = in-memory)
    preferences_file: str = ""

    @classmethod
    def from_env(cls) -> "JunkCheckConfig":
        """Create config from environment variables."""
        servers_env = os.environ.get("JUNKCHECK_DNS_SERVERS", "")
        dns_servers = (
            [s.strip() for s in servers_env.split(",") if s.strip()]
            if servers_env
            else []
        )

        return cls(
            cache_expiry=float(os.environ.get("JUNKCHECK_CACHE_EXPIRY", "3600")),
            resolver=os.environ.get("JUNKCHECK_RESOLVER", "dnspython"),
            dns_servers=dns_servers,
            dns_timeout=float(os.environ.get("JUNKCHECK_DNS_TIMEOUT", "5")),
            dns_lifetime=float(os.environ.get("JUNKCHECK_DNS_LIFETIME", "10")),
            max_workers=int(os.environ.get("JUNKCHECK_MAX_WORKERS", "20")),
            preferences_file=os.environ.get("JUNKCHECK_PREFERENCES_FILE", ""),
        )
