import select

from .base import PollerBase


class SelectPoller(PollerBase):
    def check(self, readers, writers, timeout):
        """
        select() on the waiting sockets. Sockets are checked in the order
        they started being waited on.
        """
        ready_to_read, ready_to_write, _ = select.select(
            readers,
            writers,
            [],
            timeout
        )
        return ready_to_read, ready_to_write
