"""Ordered, persisted position list with quote refresh."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Protocol

from stock_tracker.persistence.key_value import CorruptState
from stock_tracker.portfolio.models import Position, QuoteSnapshot
from stock_tracker.portfolio.serialization import decode_positions, encode_positions

LOGGER = logging.getLogger(__name__)

ChangeListener = Callable[[str], None]


class StateStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class QuoteSource(Protocol):
    def fetch(self, ticker: str) -> QuoteSnapshot | None: ...


class IndexOutOfRange(IndexError):
    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f"Position index {index} is out of range for {length} position(s).")


class PortfolioStore:
    """Owns the position list, its persisted copy and quote refreshes.

    All public operations take one re-entrant lock, so mutations and refreshes
    never interleave. Refreshes fetch one ticker at a time in list order.
    Listeners registered with ``subscribe`` are called once per successful
    operation, after the new state has been written.
    """

    def __init__(
        self,
        storage: StateStorage,
        quotes: QuoteSource,
        storage_key: str = "stocks",
        refresh_on_load: bool = True,
    ) -> None:
        self._storage = storage
        self._quotes = quotes
        self.storage_key = storage_key
        self.refresh_on_load = refresh_on_load
        self._positions: list[Position] = []
        self._lock = threading.RLock()
        self._loading = False
        self._listeners: list[ChangeListener] = []

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def positions(self) -> list[Position]:
        with self._lock:
            return [position.copy() for position in self._positions]

    def __len__(self) -> int:
        with self._lock:
            return len(self._positions)

    def get(self, index: int) -> Position:
        with self._lock:
            self._check_index(index)
            return self._positions[index].copy()

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                LOGGER.exception("change listener failed: event=%s", event)

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._positions):
            raise IndexOutOfRange(index, len(self._positions))

    @contextmanager
    def _fetching(self) -> Iterator[None]:
        self._loading = True
        try:
            yield
        finally:
            self._loading = False

    def _fetch_into(self, position: Position) -> bool:
        snapshot = self._quotes.fetch(position.ticker)
        if snapshot is None:
            return False
        position.apply_quote(snapshot)
        return True

    def load(self, strict: bool = False) -> list[Position]:
        """Replace the in-memory list with the persisted one, then refresh it.

        A missing value gives an empty portfolio. An undecodable value raises
        ``CorruptState`` when ``strict`` is set and otherwise is logged and
        treated as empty; the bad value stays on disk until the next save.
        """
        with self._lock:
            try:
                raw = self._storage.get(self.storage_key)
                positions = decode_positions(raw) if raw is not None else []
            except CorruptState as error:
                if strict:
                    raise
                LOGGER.warning("persisted portfolio unreadable, starting empty: key=%s error=%s", self.storage_key, error)
                positions = []
            self._positions = positions
            LOGGER.info("portfolio loaded: key=%s positions=%s", self.storage_key, len(positions))
            if positions and self.refresh_on_load:
                self._refresh_all_locked()
            result = self.positions
        self._notify("load")
        return result

    def save(self) -> None:
        with self._lock:
            self._storage.set(self.storage_key, encode_positions(self._positions))

    def _commit(self, positions: list[Position]) -> None:
        # The in-memory list only changes once the write has succeeded.
        self._storage.set(self.storage_key, encode_positions(positions))
        self._positions = positions

    def add(self, position: Position) -> tuple[int, Position]:
        """Append a copy of ``position``, persist, then fetch its quote.

        Returns the index it was stored at and a copy of the stored position.
        """
        with self._lock:
            stored = position.copy()
            self._commit(self._positions + [stored])
            index = len(self._positions) - 1
            with self._fetching():
                self._fetch_into(stored)
            LOGGER.info("position added: ticker=%s index=%s", stored.ticker, index)
            result = stored.copy()
        self._notify("add")
        return index, result

    def edit(self, index: int, position: Position) -> Position:
        with self._lock:
            self._check_index(index)
            stored = position.copy()
            staged = list(self._positions)
            staged[index] = stored
            self._commit(staged)
            with self._fetching():
                self._fetch_into(stored)
            LOGGER.info("position edited: ticker=%s index=%s", stored.ticker, index)
            result = stored.copy()
        self._notify("edit")
        return result

    def delete(self, index: int) -> Position:
        with self._lock:
            self._check_index(index)
            staged = list(self._positions)
            removed = staged.pop(index)
            self._commit(staged)
            LOGGER.info("position deleted: ticker=%s index=%s", removed.ticker, index)
        self._notify("delete")
        return removed

    def refresh(self, index: int) -> bool:
        with self._lock:
            self._check_index(index)
            with self._fetching():
                updated = self._fetch_into(self._positions[index])
        self._notify("refresh")
        return updated

    def _refresh_all_locked(self) -> int:
        started = time.perf_counter()
        updated = 0
        with self._fetching():
            for position in self._positions:
                if self._fetch_into(position):
                    updated += 1
        LOGGER.info(
            "refresh complete: positions=%s updated=%s latency_ms=%s",
            len(self._positions),
            updated,
            round((time.perf_counter() - started) * 1000, 2),
        )
        return updated

    def refresh_all(self) -> int:
        """Fetch quotes for every position in order; returns how many updated."""
        with self._lock:
            updated = self._refresh_all_locked()
        self._notify("refresh_all")
        return updated
