import logging
import warnings

from ..util import timeout_seconds

log = logging.getLogger(__name__)


class PollerBase(object):
    """
    Base class for a poller implemented with posix-style polling.

    The poller doesn't keep any state of it's own: the wait-sets are in the
    scheduler (`read_waiters` and `write_waiters`, mapping a socket to the
    list of tasks waiting on it). Each `run` checks all the sockets in there
    and puts the tasks waiting on the ready ones back in the ready queue.

    Subclasses implement `check`. The sockets are never closed or otherwise
    touched, they belong to the tasks.
    """

    def __init__(self, scheduler, resolution, **options):
        self.scheduler = scheduler
        if resolution is not None:
            resolution = timeout_seconds(resolution)
            if not resolution:
                raise ValueError("Poller resolution must be positive or None")
        self.resolution = resolution # seconds
        self.set_options(**options)

    def __str__(self):
        return "<%s readers:%s writers:%s>" % (
            self.__class__.__name__,
            len(self.scheduler.read_waiters),
            len(self.scheduler.write_waiters)
        )

    __repr__ = __str__

    def set_options(self, **bogus_options):
        "Takes implementation specific options. To be overriden in a subclass."
        self._warn_bogus_options(**bogus_options)

    def _warn_bogus_options(self, **opts):
        """
        Shows a warning for unsupported options for the current implementation.
        Called form set_options with remainig unsupported options.
        """
        for i in opts:
            warnings.warn("Unsupported option %s for %s" % (i, self), stacklevel=3)

    def __len__(self):
        return len(self.scheduler.read_waiters) + len(self.scheduler.write_waiters)

    def run(self, timeout=0):
        """
        Check the sockets in the wait-sets and wake up the tasks waiting on the
        ready ones. Returns the number of tasks put back in the ready queue.

        Timeout is 0 (don't block), a number of seconds/timedelta or None
        (block till some socket is ready). If a resolution is set a None
        timeout waits at most that much.

        If the check fails (eg: interrupted system call, a socket got closed
        while tasks were waiting on it) nothing is ready this time.
        """
        sched = self.scheduler
        if not sched.read_waiters and not sched.write_waiters:
            return 0
        timeout = timeout_seconds(timeout)
        if timeout is None:
            timeout = self.resolution
        readers = list(sched.read_waiters)
        writers = list(sched.write_waiters)
        try:
            ready_to_read, ready_to_write = self.check(readers, writers, timeout)
        except (OSError, ValueError) as exc:
            log.warning("Exception %r from %s ignored", exc, self)
            return 0

        ready_to_read = set(ready_to_read)
        ready_to_write = set(ready_to_write)
        woken = 0
        for sock in readers:
            if sock in ready_to_read:
                woken += self.handle_event(sched.read_waiters, sock)
        for sock in writers:
            if sock in ready_to_write:
                woken += self.handle_event(sched.write_waiters, sock)
        return woken

    def check(self, readers, writers, timeout):
        """
        Return a (ready_to_read, ready_to_write) pair of sublists of `readers`
        and `writers`. `timeout` is a float number of seconds or None.

        Overriden in a subclass.
        """
        raise NotImplementedError()

    def handle_event(self, waiters, sock):
        """
        Handle readiness for `sock`: remove all the tasks waiting on it from
        `waiters` and put them in the ready queue, in the order they started
        waiting.
        """
        if sock not in waiters:
            warnings.warn("Got event for unknown socket: %r" % (sock,))
            return 0
        tasks = waiters.pop(sock)
        for task in tasks:
            log.debug("Waking %s on %r", task, sock)
            self.scheduler.enqueue(task)
        return len(tasks)
