"""Junk checker: relay host reputation using DNSBL block lists."""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Hashable, Mapping, Optional, Sequence

from .blocklists import BlockList, BlockListRegistry
from .cache import ResultCache
from .config import JunkCheckConfig
from .headers import extract_relay_host
from .models import LookupResult, LookupStatus, RelayHost
from .preferences import MemoryPreferences, Preferences, YamlPreferences
from .resolver import NameNotFound, Resolver, ResolverError, create_resolver


class JunkChecker:
    """
    Decides whether a message's last relay is listed on an enabled block list.

    Verdicts are cached per host. Block lists are evaluated in registry
    order and the first listing stops the evaluation. Resolver faults never
    make a message junk.
    """

    def __init__(
        self,
        registry: BlockListRegistry,
        resolver: Resolver,
        cache: Optional[ResultCache] = None,
        max_workers: int = 20,
    ):
        self.logger = logging.getLogger(__name__)
        self.registry = registry
        self.resolver = resolver
        self.cache = cache if cache is not None else registry.cache
        self.max_workers = max_workers

        if self.cache is not registry.cache:
            raise ValueError("Checker and registry must share one result cache")

    @classmethod
    def from_config(
        cls, config: JunkCheckConfig, preferences: Optional[Preferences] = None
    ) -> "JunkChecker":
        """Compose a checker (cache, registry, resolver) from configuration."""
        if preferences is None:
            preferences = (
                YamlPreferences(config.preferences_file)
                if config.preferences_file
                else MemoryPreferences()
            )

        cache = ResultCache(expiry=config.cache_expiry)
        registry = BlockListRegistry(preferences, cache)
        checker = cls(
            registry, create_resolver(config), cache, max_workers=config.max_workers
        )

        checker.logger.info(
            f"Junk checker ready, enabled block lists: "
            f"{', '.join(registry.enabled_names()) or 'none'}"
        )
        return checker

    # ─────────────────────────────────────────────────────────────────
    # Enablement (delegated to the registry)
    # ─────────────────────────────────────────────────────────────────

    def is_enabled(self, blocklist: BlockList) -> bool:
        return self.registry.is_enabled(blocklist)

    def set_enabled(self, blocklist: BlockList, enabled: bool) -> None:
        self.registry.set_enabled(blocklist, enabled)

    def reset(self) -> None:
        self.registry.reset()

    def enabled_names(self) -> list[str]:
        return self.registry.enabled_names()

    # ─────────────────────────────────────────────────────────────────
    # Checks
    # ─────────────────────────────────────────────────────────────────

    def is_junk(self, received: Optional[Sequence[str]]) -> Optional[bool]:
        """
        Check the most recent relay of a message.

        Args:
            received: Received header values, most recent hop last

        Returns:
            True/False, or None when no relay host could be extracted
        """
        host = extract_relay_host(received)
        if host is None:
            self.logger.debug("No relay host in Received headers")
            return None
        return self.check_host(host)

    def check_host(
        self, host: str, blocklists: Optional[Sequence[BlockList]] = None
    ) -> bool:
        """Check a relay host against the enabled block lists."""
        host = host.lower()

        cached = self.cache.get(host)
        if cached is not None:
            self.logger.debug(f"Cache hit {host} junk={cached}")
            return cached

        relay = RelayHost.parse(host)
        junk = False
        for blocklist in self.registry if blocklists is None else blocklists:
            if not self.registry.is_enabled(blocklist):
                continue

            try:
                junk = self.check_blocklist(relay, blocklist)
            except Exception as e:
                self.logger.error(f"Checking {host} @ {blocklist.name} failed: {e}")
                junk = False

            if junk:
                break

        self.cache.put(host, junk)
        return junk

    def check_blocklist(self, host: RelayHost, blocklist: BlockList) -> bool:
        """Check a relay host against a single block list."""
        start = time.monotonic()
        queries = blocklist.queries(host, self.resolver)

        try:
            for query in queries:
                try:
                    result = self.query(query, blocklist)
                except Exception as e:
                    self.logger.warning(
                        f"Lookup {query} failed, treating as not blocked: {e}"
                    )
                    continue
                if result.blocked:
                    return True
        except ResolverError as e:
            # Raised by address resolution inside the query generator
            self.logger.warning(f"Could not resolve {host} for {blocklist.name}: {e}")
        finally:
            elapsed = int((time.monotonic() - start) * 1000)
            self.logger.debug(f"Checked {host} @ {blocklist.name} elapsed={elapsed} ms")

        return False

    def query(self, query: str, blocklist: BlockList) -> LookupResult:
        """Perform a single DNSBL lookup."""
        start = time.monotonic()

        try:
            answers = self.resolver.lookup(query)
        except NameNotFound:
            result = LookupResult(
                query=query, blocklist=blocklist.name, status=LookupStatus.NOT_BLOCKED
            )
        except ResolverError as e:
            result = LookupResult(
                query=query,
                blocklist=blocklist.name,
                status=LookupStatus.LOOKUP_FAILED,
                reason=str(e),
            )
        else:
            listed = next((a for a in answers if blocklist.matches(a)), None)
            if listed is None:
                result = LookupResult(
                    query=query,
                    blocklist=blocklist.name,
                    status=LookupStatus.NOT_BLOCKED,
                    return_code=str(answers[0]) if answers else "",
                    reason="Unlisted return code",
                )
            else:
                result = LookupResult(
                    query=query,
                    blocklist=blocklist.name,
                    status=LookupStatus.BLOCKED,
                    return_code=str(listed),
                    reason=blocklist.reason(str(listed)),
                )

        result.elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.status is LookupStatus.LOOKUP_FAILED:
            self.logger.warning(
                f"Lookup {query} failed, treating as not blocked: {result.reason}"
            )
        else:
            self.logger.info(
                f"Lookup {query} result={result.return_code or None} "
                f"blocked={result.blocked} elapsed={result.elapsed_ms} ms"
            )
        return result

    def check_all(
        self, messages: Mapping[Hashable, Optional[Sequence[str]]]
    ) -> dict[Hashable, Optional[bool]]:
        """Check many messages in parallel, sharing the verdict cache."""
        results: dict[Hashable, Optional[bool]] = {}
        if not messages:
            return results

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures: dict[Future[Optional[bool]], Hashable] = {
                executor.submit(self.is_junk, received): key
                for key, received in messages.items()
            }

            for future in as_completed(futures):
                key = futures[future]
                try:
                    results[key] = future.result()
                except Exception as e:
                    self.logger.warning(f"Failed to check message {key}: {e}")
                    results[key] = None

        return results


def create_checker(preferences: Optional[Preferences] = None) -> JunkChecker:
    """
    Convenience function to build a checker from environment variables.

    Args:
        preferences: Optional preference store overriding JUNKCHECK_PREFERENCES_FILE

    Returns:
        Configured JunkChecker
    """
    return JunkChecker.from_config(JunkCheckConfig.from_env(), preferences)
