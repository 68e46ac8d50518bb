"""Ordered registry of source adapters with their trust weight and timeout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from recipe_search.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from recipe_search.core.config import SourcesSettings
    from recipe_search.sources.protocol import SourceAdapter

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SourceRegistration:
    """A source adapter bound to its static trust weight and timeout."""

    adapter: SourceAdapter
    name: str
    weight: float
    timeout: float  # seconds


class SourceRegistry:
    """Registered sources in registration order.

    Registration order is load-bearing: it is the fan-out merge order, and
    therefore decides which provider's copy of a duplicated recipe survives.
    """

    def __init__(self, settings: SourcesSettings) -> None:
        """Initialize an empty registry.

        Args:
            settings: Defaults and per-source overrides for weight and timeout.
        """
        self._settings = settings
        self._registrations: list[SourceRegistration] = []

    @classmethod
    def from_adapters(
        cls,
        adapters: Iterable[SourceAdapter],
        settings: SourcesSettings,
    ) -> SourceRegistry:
        """Build a registry from adapters, in the given order."""
        registry = cls(settings)
        for adapter in adapters:
            registry.register(adapter)
        return registry

    def register(
        self,
        adapter: SourceAdapter,
        *,
        weight: float | None = None,
        timeout: float | None = None,
    ) -> SourceRegistration:
        """Register an adapter after the ones already registered.

        Weight and timeout resolve as: explicit argument, then the settings
        override for the adapter's name, then the settings default.

        Raises:
            ValueError: If the name is taken, the weight is negative or the
                timeout is not positive.
        """
        name = adapter.name
        if any(r.name == name for r in self._registrations):
            msg = f"Source '{name}' is already registered"
            raise ValueError(msg)

        override = self._settings.overrides.get(name)
        if weight is None:
            weight = (
                override.weight
                if override is not None and override.weight is not None
                else self._settings.default_weight
            )
        if timeout is None:
            timeout = (
                override.timeout
                if override is not None and override.timeout is not None
                else self._settings.default_timeout
            )

        if weight < 0:
            msg = f"Source '{name}' weight must be >= 0, got {weight}"
            raise ValueError(msg)
        if timeout <= 0:
            msg = f"Source '{name}' timeout must be > 0, got {timeout}"
            raise ValueError(msg)

        registration = SourceRegistration(
            adapter=adapter,
            name=name,
            weight=float(weight),
            timeout=float(timeout),
        )
        self._registrations.append(registration)
        logger.debug(
            "Registered recipe source",
            source=name,
            weight=registration.weight,
            timeout=registration.timeout,
        )
        return registration

    def highest_weight(self) -> SourceRegistration | None:
        """Return the most trusted source; the earliest registered wins ties."""
        best: SourceRegistration | None = None
        for registration in self._registrations:
            if best is None or registration.weight > best.weight:
                best = registration
        return best

    @property
    def names(self) -> list[str]:
        """Registered source names in registration order."""
        return [r.name for r in self._registrations]

    @property
    def max_timeout(self) -> float:
        """Longest per-source timeout, which bounds a fan-out round."""
        return max((r.timeout for r in self._registrations), default=0.0)

    def __iter__(self) -> Iterator[SourceRegistration]:
        return iter(tuple(self._registrations))

    def __len__(self) -> int:
        return len(self._registrations)
