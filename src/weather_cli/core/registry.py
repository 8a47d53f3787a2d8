"""Location registry: the single owner of the saved-location invariants.

Every change to :attr:`Configuration.locations` goes through
:class:`LocationRegistry` so that name uniqueness is enforced in one
place.  Each successful mutation is persisted immediately through the
injected :class:`~weather_cli.core.protocols.ConfigStore`.

Guarantees
----------
* Names are unique (case-sensitive exact match).
* A failed call leaves the in-memory list exactly as it was, including
  when persisting the change fails.
* Insertion order is preserved; :meth:`update` keeps the position.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from weather_cli.core.models import Configuration, Location
from weather_cli.core.protocols import ConfigStore
from weather_cli.exceptions import DuplicateLocationError, LocationNotFoundError

logger = logging.getLogger(__name__)


class LocationRegistry:
    """Uniqueness- and existence-enforcing wrapper over a location list.

    Parameters
    ----------
    config:
        The configuration whose ``locations`` list this registry owns.
    store:
        Where each successful mutation is persisted.
    """

    def __init__(self, config: Configuration, store: ConfigStore) -> None:
        self._config: Configuration = config
        self._store: ConfigStore = store

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, name: str) -> Location:
        """Return the location called *name*.

        Raises
        ------
        LocationNotFoundError
            If no saved location has that name.
        """
        return self._config.locations[self._index_of(name)]

    def list(self) -> tuple[Location, ...]:
        """Return all saved locations in insertion order."""
        return tuple(self._config.locations)

    def __contains__(self, name: object) -> bool:
        return any(loc.name == name for loc in self._config.locations)

    def __len__(self) -> int:
        return len(self._config.locations)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, name: str, latitude: float, longitude: float) -> Location:
        """Append a new location and persist.

        Raises
        ------
        DuplicateLocationError
            If a location with the same name already exists.
        """
        if name in self:
            raise DuplicateLocationError(name)

        location = Location(name=name, latitude=latitude, longitude=longitude)
        self._commit(self._config.locations + [location])
        logger.debug("Added location %r (%s, %s)", name, latitude, longitude)
        return location

    def remove(self, name: str) -> Location:
        """Remove the location called *name* and persist.

        Raises
        ------
        LocationNotFoundError
            If no saved location has that name.
        """
        index = self._index_of(name)
        removed = self._config.locations[index]
        remaining = self._config.locations[:index] + self._config.locations[index + 1:]
        self._commit(remaining)
        logger.debug("Removed location %r", name)
        return removed

    def update(self, name: str, latitude: float, longitude: float) -> Location:
        """Replace the coordinates of *name* in place and persist.

        Raises
        ------
        LocationNotFoundError
            If no saved location has that name.
        """
        index = self._index_of(name)
        updated = replace(
            self._config.locations[index],
            latitude=latitude,
            longitude=longitude,
        )
        locations = list(self._config.locations)
        locations[index] = updated
        self._commit(locations)
        logger.debug("Updated location %r to (%s, %s)", name, latitude, longitude)
        return updated

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_of(self, name: str) -> int:
        for index, loc in enumerate(self._config.locations):
            if loc.name == name:
                return index
        raise LocationNotFoundError(name)

    def _commit(self, locations: list[Location]) -> None:
        """Swap in *locations* and persist, restoring the old list on failure."""
        previous = self._config.locations
        self._config.locations = locations
        try:
            self._store.save(self._config)
        except Exception:
            self._config.locations = previous
            raise
