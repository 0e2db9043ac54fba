"""Detection of deadlocks in the graph of transactions waiting on each other."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

_EPOCH = 0.0


class TransactionInfo(Protocol):
    """What the detector needs to know about a transaction."""

    @property
    def id(self) -> int: ...

    @property
    def start_timestamp(self) -> float: ...


@dataclass(frozen=True, order=True)
class WaitForEdge:
    """Transaction ``from_tx`` waits for ``to_tx`` to release ``resource``."""

    from_tx: int
    to_tx: int
    resource: str


class DeadlockDetector:
    """Keeps a wait-for graph and finds cycles in it."""

    def __init__(self) -> None:
        self._graph: dict[int, set[WaitForEdge]] = {}

    def __repr__(self) -> str:
        edge_count = sum(len(edges) for edges in self._graph.values())
        return f"DeadlockDetector(waiting={len(self._graph)}, edges={edge_count})"

    def __len__(self) -> int:
        """Number of transactions that wait on some other transaction."""
        return len(self._graph)

    def __contains__(self, tx_id: object) -> bool:
        return tx_id in self._graph

    def add_wait(self, waiting_tx: int, holding_tx: int, resource: str) -> None:
        """Record that ``waiting_tx`` waits for ``holding_tx`` on ``resource``."""
        edge = WaitForEdge(waiting_tx, holding_tx, resource)
        self._graph.setdefault(waiting_tx, set()).add(edge)

    def remove_transaction(self, tx_id: int) -> None:
        """Forget a transaction's waits and every wait on it."""
        self._graph.pop(tx_id, None)
        for waiting, edges in self._graph.items():
            self._graph[waiting] = {edge for edge in edges if edge.to_tx != tx_id}

    def edges(self, tx_id: int) -> frozenset[WaitForEdge]:
        """The waits recorded for ``tx_id``."""
        return frozenset(self._graph.get(tx_id, ()))

    def _sorted_edges(self, tx_id: int) -> list[WaitForEdge]:
        return sorted(self._graph.get(tx_id, ()))

    def find_cycle(self, start_tx: int) -> list[int] | None:
        """Transactions on a cycle through ``start_tx``, in wait order, or None."""
        if any(edge.to_tx == start_tx for edge in self._graph.get(start_tx, ())):
            return [start_tx]
        return self._search(start_tx, start_tx, set(), [])

    def _search(
        self, current: int, start: int, visited: set[int], path: list[int]
    ) -> list[int] | None:
        path.append(current)
        visited.add(current)
        for edge in self._sorted_edges(current):
            if edge.to_tx == start and len(path) > 1:
                return list(path)
            if edge.to_tx not in visited:
                cycle = self._search(edge.to_tx, start, visited, path)
                if cycle is not None:
                    return cycle
        path.pop()
        visited.discard(current)
        return None

    def detect_deadlock(self, transactions: Iterable[TransactionInfo]) -> int | None:
        """The id of the transaction to abort to break a deadlock, or None."""
        known = list(transactions)
        for start in list(self._graph):
            cycle = self.find_cycle(start)
            if cycle is not None:
                return self.select_victim(cycle, known)
        return None

    def select_victim(
        self, cycle: Sequence[int], transactions: Iterable[TransactionInfo]
    ) -> int:
        """The youngest transaction of ``cycle``; unknown ones count as oldest.

        On equal start times the one later in the cycle is chosen; an empty
        cycle gives 0.
        """
        started: dict[int, float] = {}
        for tx in transactions:
            started.setdefault(tx.id, tx.start_timestamp)
        victim = 0
        best: float | None = None
        for tx_id in cycle:
            stamp = started.get(tx_id, _EPOCH)
            if best is None or stamp >= best:
                victim, best = tx_id, stamp
        return victim