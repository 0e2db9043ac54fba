from dataclasses import dataclass

import pytest

from reefdb.deadlock import DeadlockDetector, WaitForEdge


@dataclass
class FakeTx:
    id: int
    start_timestamp: float


def make_transactions(count, step=0.01):
    return [FakeTx(i + 1, 1000.0 + i * step) for i in range(count)]


def test_new_detector_is_empty():
    detector = DeadlockDetector()
    assert len(detector) == 0
    assert detector.edges(1) == frozenset()


def test_add_wait():
    detector = DeadlockDetector()
    detector.add_wait(1, 2, "users")
    assert len(detector) == 1
    assert 1 in detector
    edges = detector.edges(1)
    assert len(edges) == 1
    (edge,) = edges
    assert edge.from_tx == 1
    assert edge.to_tx == 2
    assert edge.resource == "users"
    assert edge == WaitForEdge(1, 2, "users")


def test_add_same_wait_twice_is_one_edge():
    detector = DeadlockDetector()
    detector.add_wait(1, 2, "users")
    detector.add_wait(1, 2, "users")
    assert len(detector.edges(1)) == 1


def test_remove_transaction():
    detector = DeadlockDetector()
    detector.add_wait(1, 2, "users")
    detector.add_wait(2, 3, "posts")
    detector.add_wait(3, 1, "comments")
    detector.remove_transaction(2)
    assert 2 not in detector
    assert all(edge.to_tx != 2 for edge in detector.edges(1))
    assert detector.edges(3) == frozenset({WaitForEdge(3, 1, "comments")})


def test_detect_deadlock_simple():
    detector = DeadlockDetector()
    tx1, tx2 = make_transactions(2)
    detector.add_wait(tx1.id, tx2.id, "users")
    detector.add_wait(tx2.id, tx1.id, "posts")
    assert detector.detect_deadlock([tx1, tx2]) == tx2.id


def test_detect_deadlock_simple_equal_timestamps_picks_later_in_cycle():
    detector = DeadlockDetector()
    tx1, tx2 = FakeTx(1, 5.0), FakeTx(2, 5.0)
    detector.add_wait(1, 2, "users")
    detector.add_wait(2, 1, "posts")
    assert detector.detect_deadlock([tx1, tx2]) == 2


def test_detect_deadlock_complex():
    detector = DeadlockDetector()
    tx1, tx2, tx3, tx4 = make_transactions(4)
    detector.add_wait(tx1.id, tx2.id, "table1")
    detector.add_wait(tx2.id, tx3.id, "table2")
    detector.add_wait(tx3.id, tx4.id, "table3")
    detector.add_wait(tx4.id, tx2.id, "table4")
    assert detector.detect_deadlock([tx1, tx2, tx3, tx4]) == tx4.id


def test_no_deadlock():
    detector = DeadlockDetector()
    tx1, tx2, tx3 = make_transactions(3)
    detector.add_wait(tx1.id, tx2.id, "users")
    detector.add_wait(tx2.id, tx3.id, "posts")
    assert detector.detect_deadlock([tx1, tx2, tx3]) is None


def test_multiple_edges():
    detector = DeadlockDetector()
    tx1, tx2, tx3, tx4 = make_transactions(4)
    detector.add_wait(tx1.id, tx2.id, "users")
    detector.add_wait(tx1.id, tx3.id, "posts")
    detector.add_wait(tx1.id, tx4.id, "comments")
    assert len(detector) == 1
    assert len(detector.edges(tx1.id)) == 3
    assert detector.detect_deadlock([tx1, tx2, tx3, tx4]) is None


def test_self_deadlock():
    detector = DeadlockDetector()
    (tx1,) = make_transactions(1)
    detector.add_wait(tx1.id, tx1.id, "users")
    assert detector.find_cycle(tx1.id) == [tx1.id]
    assert detector.detect_deadlock([tx1]) == tx1.id


def test_select_victim():
    detector = DeadlockDetector()
    tx1, tx2, tx3 = make_transactions(3)
    cycle = [tx1.id, tx2.id, tx3.id]
    assert detector.select_victim(cycle, [tx1, tx2, tx3]) == tx3.id


def test_select_victim_unknown_transactions_count_as_oldest():
    detector = DeadlockDetector()
    known = FakeTx(7, 50.0)
    assert detector.select_victim([7, 99], [known]) == 7


def test_select_victim_empty_cycle():
    assert DeadlockDetector().select_victim([], []) == 0


def test_find_cycle_returns_wait_order():
    detector = DeadlockDetector()
    detector.add_wait(2, 3, "a")
    detector.add_wait(3, 4, "b")
    detector.add_wait(4, 2, "c")
    assert detector.find_cycle(2) == [2, 3, 4]
    assert detector.find_cycle(3) == [3, 4, 2]


def test_find_cycle_none_when_start_not_on_cycle():
    detector = DeadlockDetector()
    detector.add_wait(1, 2, "a")
    detector.add_wait(2, 3, "b")
    detector.add_wait(3, 2, "c")
    assert detector.find_cycle(1) is None
    assert detector.find_cycle(2) == [2, 3]


def test_removing_transaction_breaks_deadlock():
    detector = DeadlockDetector()
    tx1, tx2 = make_transactions(2)
    detector.add_wait(1, 2, "users")
    detector.add_wait(2, 1, "posts")
    victim = detector.detect_deadlock([tx1, tx2])
    assert victim == 2
    detector.remove_transaction(victim)
    assert detector.detect_deadlock([tx1, tx2]) is None


@pytest.mark.parametrize("size", [2, 3, 5, 8])
def test_ring_victim_is_youngest(size):
    detector = DeadlockDetector()
    txs = make_transactions(size)
    for tx, nxt in zip(txs, txs[1:] + txs[:1]):
        detector.add_wait(tx.id, nxt.id, f"r{tx.id}")
    assert detector.detect_deadlock(txs) == txs[-1].id