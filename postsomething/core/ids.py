"""Integer identifiers for posts and comments.

Cassandra has no auto-increment, so ids are time ordered, Snowflake style:

    | 41 bits millis since EPOCH_MS | 5 bits worker | 7 bits sequence |

The worker bits keep processes that share a keyspace apart. The whole value
stays below 2**53 so JSON clients keep full precision.
"""

import os
import threading
import time


EPOCH_MS = 1_704_067_200_000  # 2024-01-01T00:00:00Z

WORKER_BITS = 5
SEQUENCE_BITS = 7
MAX_WORKER_ID = (1 << WORKER_BITS) - 1
_SEQUENCE_MASK = (1 << SEQUENCE_BITS) - 1

# Largest value a Cassandra BIGINT column accepts
BIGINT_MAX = 2**63 - 1


class IdGenerator:
    """Per-process source of unique, increasing ids.

    Once the sequence is used up within a millisecond, the generator moves
    on to the next millisecond even if the clock has not got there yet.
    A stalled or rewound clock therefore never repeats an id.
    """

    def __init__(self, worker_id: int):
        if not 0 <= worker_id <= MAX_WORKER_ID:
            msg = f"worker_id must be between 0 and {MAX_WORKER_ID}"
            raise ValueError(msg)
        self.worker_id = worker_id
        self._last_millis = -1
        self._sequence = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            millis = time.time_ns() // 1_000_000 - EPOCH_MS
            if millis > self._last_millis:
                self._last_millis = millis
                self._sequence = 0
            else:
                self._sequence = (self._sequence + 1) & _SEQUENCE_MASK
                if self._sequence == 0:
                    self._last_millis += 1

            return (
                (self._last_millis << (WORKER_BITS + SEQUENCE_BITS))
                | (self.worker_id << SEQUENCE_BITS)
                | self._sequence
            )


_generator = IdGenerator(os.getpid() & MAX_WORKER_ID)


def next_id() -> int:
    """Generate a new positive integer identifier."""
    return _generator.next_id()
