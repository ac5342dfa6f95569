"""DNSBL block lists: variants, definitions and enablement registry."""

from .base import BlockList, BlockListKind, DomainBlockList, ReverseIpBlockList
from .registry import PREFERENCE_PREFIX, BlockListRegistry
from .services import SERVICES, BlockListService, build_blocklists

__all__ = [
    "BlockList",
    "BlockListKind",
    "DomainBlockList",
    "ReverseIpBlockList",
    "BlockListRegistry",
    "PREFERENCE_PREFIX",
    "BlockListService",
    "SERVICES",
    "build_blocklists",
]
