"""Relay reputation checking against DNS block lists.

Public API:
    - JunkChecker: Checks a message's last relay against enabled block lists
    - create_checker: Build a checker from environment variables
    - JunkCheckConfig: Configuration dataclass
    - ResultCache: Shared, time-limited verdict cache
    - extract_relay_host: Relay host from Received headers

Block list API:
    - BlockList, ReverseIpBlockList, DomainBlockList: Provider variants
    - BlockListRegistry: Ordered block lists plus enablement overrides

Preferences:
    - Preferences: Boolean key-value store interface
    - MemoryPreferences, YamlPreferences: Implementations

Resolvers:
    - Resolver: Name resolution interface
    - DnspythonResolver, SystemResolver: Implementations
"""

from .blocklists import (
    BlockList,
    BlockListKind,
    BlockListRegistry,
    DomainBlockList,
    ReverseIpBlockList,
)
from .cache import ResultCache
from .checker import JunkChecker, create_checker
from .config import JunkCheckConfig
from .headers import extract_relay_host
from .models import LookupResult, LookupStatus, RelayHost
from .preferences import MemoryPreferences, Preferences, YamlPreferences
from .resolver import (
    DnspythonResolver,
    NameNotFound,
    Resolver,
    ResolverError,
    SystemResolver,
)

__all__ = [
    # Main API
    "JunkChecker",
    "create_checker",
    "JunkCheckConfig",
    "ResultCache",
    "extract_relay_host",
    "LookupResult",
    "LookupStatus",
    "RelayHost",
    # Block lists
    "BlockList",
    "BlockListKind",
    "BlockListRegistry",
    "DomainBlockList",
    "ReverseIpBlockList",
    # Preferences
    "Preferences",
    "MemoryPreferences",
    "YamlPreferences",
    # Resolvers
    "Resolver",
    "DnspythonResolver",
    "SystemResolver",
    "NameNotFound",
    "ResolverError",
]
