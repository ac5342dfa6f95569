"""
Block list definitions.

Declarative configuration for the supported DNSBL services.
Each service is defined as a dataclass with:
- name: unique name, also the preference key suffix
- zone: DNSBL zone name
- numeric: True for reverse-IP queries, False for domain queries
- enabled: checked unless the user overrides it
- responses: answers meaning "listed" (empty = any answer)
- reason_map: human-readable reasons for each return code
"""

import ipaddress
import logging
from dataclasses import dataclass, field

from .base import BlockList, DomainBlockList, ReverseIpBlockList

logger = logging.getLogger(__name__)


@dataclass
class BlockListService:
    """Configuration for a single DNSBL service."""

    name: str
    zone: str
    numeric: bool = True
    enabled: bool = True
    responses: list[str] = field(default_factory=list)
    reason_map: dict[str, str] = field(default_factory=dict)


SERVICES: list[BlockListService] = [
    # ─────────────────────────────────────────────────────────────────────────
    # Spamhaus ZEN (SBL + XBL; PBL codes do not count as listings)
    # ─────────────────────────────────────────────────────────────────────────
    BlockListService(
        name="Spamhaus/zen",
        zone="zen.spamhaus.org",
        responses=["127.0.0.2", "127.0.0.3", "127.0.0.4", "127.0.0.9"],
        reason_map={
            "127.0.0.2": "SBL (direct spam source)",
            "127.0.0.3": "SBL CSS (spam operations)",
            "127.0.0.4": "XBL (exploits/proxies)",
            "127.0.0.9": "SBL (drop list)",
        },
    ),
    # ─────────────────────────────────────────────────────────────────────────
    # Spamhaus DBL
    # ─────────────────────────────────────────────────────────────────────────
    BlockListService(
        name="Spamhaus/DBL",
        zone="dbl.spamhaus.org",
        numeric=False,
        enabled=False,
        responses=[
            "127.0.1.2",
            "127.0.1.4",
            "127.0.1.5",
            "127.0.1.6",
            "127.0.1.102",
            "127.0.1.103",
            "127.0.1.104",
            "127.0.1.105",
            "127.0.1.106",
        ],
        reason_map={
            "127.0.1.2": "Spam domain",
            "127.0.1.4": "Phishing domain",
            "127.0.1.5": "Malware domain",
            "127.0.1.6": "Botnet C&C",
            "127.0.1.102": "Abused legit spam",
            "127.0.1.103": "Abused spammed redirector",
            "127.0.1.104": "Abused legit phishing",
            "127.0.1.105": "Abused legit malware",
            "127.0.1.106": "Abused legit botnet",
        },
    ),
    # ─────────────────────────────────────────────────────────────────────────
    # SpamCop
    # ─────────────────────────────────────────────────────────────────────────
    BlockListService(
        name="Spamcop",
        zone="bl.spamcop.net",
        responses=["127.0.0.2"],
        reason_map={"127.0.0.2": "SpamCop reported"},
    ),
    # ─────────────────────────────────────────────────────────────────────────
    # Barracuda
    # ─────────────────────────────────────────────────────────────────────────
    BlockListService(
        name="Barracuda",
        zone="b.barracudacentral.org",
        enabled=False,
        responses=["127.0.0.2"],
        reason_map={"127.0.0.2": "Barracuda RBL"},
    ),
]


def _parse_responses(service: BlockListService) -> frozenset:
    try:
        return frozenset(ipaddress.ip_address(r) for r in service.responses)
    except ValueError as e:
        # Empty set: any answer means listed
        logger.error(f"Invalid response address for {service.name}: {e}")
        return frozenset()


def build_blocklists(
    services: list[BlockListService] | None = None,
) -> tuple[BlockList, ...]:
    """Build block lists from service definitions, numbering them from 1."""
    blocklists: list[BlockList] = []

    for index, service in enumerate(SERVICES if services is None else services, 1):
        cls = ReverseIpBlockList if service.numeric else DomainBlockList
        blocklists.append(
            cls(
                id=index,
                name=service.name,
                zone=service.zone.strip(".").lower(),
                default_enabled=service.enabled,
                responses=_parse_responses(service),
                reasons=dict(service.reason_map),
            )
        )

    names = [b.name for b in blocklists]
    duplicates = {n for n in names if names.count(n) > 1}
    if duplicates:
        raise ValueError(f"Duplicate block list names: {', '.join(sorted(duplicates))}")

    return tuple(blocklists)
