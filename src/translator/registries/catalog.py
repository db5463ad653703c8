"""Capability catalog.

Read-only registry of the signals a strategy may use. Built once from
SIGNAL_CAPABILITIES; IDs and aliases are matched case-insensitively.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache

from .signals import SIGNAL_CAPABILITIES, SignalCapability


class CapabilityCatalog:
    """Lookup structure over a fixed set of signal capabilities."""

    def __init__(self, capabilities: Iterable[SignalCapability] = SIGNAL_CAPABILITIES):
        # Keyed by lowercased ID / alias
        self._capabilities: dict[str, SignalCapability] = {}
        self._aliases: dict[str, list[str]] = {}

        for capability in capabilities:
            self._capabilities[capability.id.lower()] = capability
            # An alias may map to several IDs; lookups take the first one
            for alias in capability.aliases:
                self._aliases.setdefault(alias.lower(), []).append(capability.id)

    def __len__(self) -> int:
        return len(self._capabilities)

    def __contains__(self, id: object) -> bool:
        return isinstance(id, str) and self.lookup(id) is not None

    def lookup(self, id: str) -> SignalCapability | None:
        """Get a capability by ID, falling back to the alias table.

        Args:
            id: Canonical catalog ID or alias (any case)

        Returns:
            The capability, or None if neither the ID nor an alias matches
        """
        key = id.lower()
        capability = self._capabilities.get(key)
        if capability is not None:
            return capability

        canonical_ids = self._aliases.get(key)
        if not canonical_ids:
            return None
        return self._capabilities.get(canonical_ids[0].lower())

    def search_by_name(self, pattern: str) -> list[SignalCapability]:
        """Capabilities whose name or any alias contains pattern (any case).

        Results are in registration order.
        """
        needle = pattern.lower()
        return [
            c
            for c in self._capabilities.values()
            if needle in c.name.lower() or any(needle in a.lower() for a in c.aliases)
        ]

    def list_all(self) -> list[SignalCapability]:
        """All capabilities in registration order."""
        return list(self._capabilities.values())

    def categories(self) -> list[str]:
        """Distinct categories, sorted."""
        return sorted({c.category for c in self._capabilities.values()})

    def compact_registry(self) -> str:
        """One line per capability, for inclusion in translator prompts.

        Sorted by (category, name) so the prompt text is stable.
        """
        entries = sorted(self._capabilities.values(), key=lambda c: (c.category, c.name))
        return "\n".join(f"- {c.name} (ID: {c.id}) - {c.description}" for c in entries)


@lru_cache(maxsize=1)
def get_default_catalog() -> CapabilityCatalog:
    """Process-wide catalog built from the curated signal set."""
    return CapabilityCatalog()
