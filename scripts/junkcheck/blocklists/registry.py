"""
Block list registry.

Holds the fixed, ordered block lists and the user's enable/disable
overrides. Any change to the overrides clears the verdict cache, since
cached verdicts were computed from the previously enabled set.
"""

import logging
from typing import Iterator, Optional

from ..cache import ResultCache
from ..preferences import Preferences
from .base import BlockList
from .services import build_blocklists

PREFERENCE_PREFIX = "blocklist."


class BlockListRegistry:
    """Ordered block lists plus enablement overrides."""

    def __init__(
        self,
        preferences: Preferences,
        cache: ResultCache,
        blocklists: Optional[tuple[BlockList, ...]] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.preferences = preferences
        self.cache = cache
        self.blocklists: tuple[BlockList, ...] = (
            build_blocklists() if blocklists is None else tuple(blocklists)
        )

        self.logger.debug(
            f"Loaded {len(self.blocklists)} block lists: "
            f"{', '.join(b.name for b in self.blocklists)}"
        )

    def __iter__(self) -> Iterator[BlockList]:
        return iter(self.blocklists)

    def __len__(self) -> int:
        return len(self.blocklists)

    @staticmethod
    def _key(blocklist: BlockList) -> str:
        return PREFERENCE_PREFIX + blocklist.name

    def get(self, name: str) -> Optional[BlockList]:
        """Get a block list by name."""
        for blocklist in self.blocklists:
            if blocklist.name == name:
                return blocklist
        return None

    def is_enabled(self, blocklist: BlockList) -> bool:
        value = self.preferences.get_boolean(self._key(blocklist))
        return blocklist.default_enabled if value is None else value

    def set_enabled(self, blocklist: BlockList, enabled: bool) -> None:
        """Store an override (or drop it when it equals the default)."""
        key = self._key(blocklist)
        try:
            if enabled == blocklist.default_enabled:
                self.preferences.remove(key)
            else:
                self.preferences.set_boolean(key, enabled)
        finally:
            # Cleared even if the store failed half way
            self.cache.clear()

        self.logger.info(f"Block list {blocklist.name} enabled={enabled}")

    def reset(self) -> None:
        """Drop all overrides, back to the built-in defaults."""
        try:
            for blocklist in self.blocklists:
                self.preferences.remove(self._key(blocklist))
        finally:
            self.cache.clear()

        self.logger.info("Block lists reset to defaults")

    def enabled(self) -> list[BlockList]:
        return [b for b in self.blocklists if self.is_enabled(b)]

    def enabled_names(self) -> list[str]:
        """Names of the enabled block lists, in registry order."""
        return [b.name for b in self.enabled()]
