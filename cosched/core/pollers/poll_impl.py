import select
import collections

from .base import PollerBase

READ_EVENTS = select.POLLIN | select.POLLPRI | select.POLLHUP | select.POLLERR
WRITE_EVENTS = select.POLLOUT | select.POLLHUP | select.POLLERR


def fileno(sock):
    return sock if isinstance(sock, int) else sock.fileno()

class PollPoller(PollerBase):
    """
    poll() based poller, doesn't have select's FD_SETSIZE limit.

    A new poll object is built for every check because the wait-sets change
    all the time (sockets are removed from them as soon as they are ready).
    """
    def check(self, readers, writers, timeout):
        masks = collections.defaultdict(int)
        read_fds = collections.defaultdict(list)
        write_fds = collections.defaultdict(list)
        for sock in readers:
            fd = fileno(sock)
            if fd < 0:
                raise ValueError("Socket %r has a bad file descriptor" % (sock,))
            masks[fd] |= select.POLLIN | select.POLLPRI
            read_fds[fd].append(sock)
        for sock in writers:
            fd = fileno(sock)
            if fd < 0:
                raise ValueError("Socket %r has a bad file descriptor" % (sock,))
            masks[fd] |= select.POLLOUT
            write_fds[fd].append(sock)

        poller = select.poll()
        for fd, mask in masks.items():
            poller.register(fd, mask)

        ready_to_read, ready_to_write = [], []
        for fd, event in poller.poll(None if timeout is None else timeout * 1000):
            if event & select.POLLNVAL:
                raise OSError("Invalid file descriptor %s in poll" % fd)
            if event & READ_EVENTS and fd in read_fds:
                ready_to_read.extend(read_fds[fd])
            if event & WRITE_EVENTS and fd in write_fds:
                ready_to_write.extend(write_fds[fd])
        return ready_to_read, ready_to_write
