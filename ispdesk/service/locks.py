import threading
from contextlib import contextmanager


class CustomerLocks:
    """
    Per-customer mutual exclusion for balance mutations.

    Payments against the same customer run one at a time; payments against
    different customers never wait on each other. Entries are dropped once no
    thread holds or waits on them.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}  # customer_id -> [lock, users]

    @contextmanager
    def hold(self, customer_id):
        with self._guard:
            entry = self._locks.setdefault(customer_id, [threading.Lock(), 0])
            entry[1] += 1

        entry[0].acquire()
        try:
            yield
        finally:
            entry[0].release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[customer_id]

    def __len__(self):
        with self._guard:
            return len(self._locks)


customer_locks = CustomerLocks()
