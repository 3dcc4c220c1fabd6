"""
Scheduling framework.

The scheduler keeps the tasks, runs the ready ones in FIFO order and applies
the system calls they yield. Most of the logic of what happens to a task that
yielded a system call is in the system call itself.
See: :mod:`cosched.core.events`.

Socket readiness is checked by a poller task that the scheduler adds when it
starts running. It's a task like any other: it gets in the ready queue, when
it runs it checks the sockets in the wait-sets (without blocking if there are
other ready tasks, blocking otherwise), puts the tasks waiting on ready
sockets in the ready queue and yields.

`cosched` is multi-state. All the state related to tasks and sockets is in the
scheduler, so you could run several schedulers in the same process.
"""
__all__ = ['Scheduler']
import collections
import logging

from cosched.core.pollers import DefaultPoller
from cosched.core.tasks import Task
from cosched.core.events import SystemCall
from cosched.core.util import fmt_list

log = logging.getLogger(__name__)


class Scheduler(object):
    """Basic deque-based FIFO scheduler with socket readiness support.

    Usage:

    .. sourcecode:: python

        mysched = Scheduler(poller=DefaultPoller, poller_resolution=None)

    * poller: a poller class to use, check :mod:`cosched.core.pollers`.

    * poller_resolution: None means the poller task blocks until some socket
      is ready when there's nothing else to run. A timedelta or number of
      seconds caps how long it blocks at once (so that `stop` gets a chance
      to take effect).

    Other keyword arguments are passed to the poller.
    """
    def __init__(self, poller=DefaultPoller, poller_resolution=None,
            **poller_options):
        if not callable(poller):
            raise RuntimeError("Invalid poller constructor")
        self.next_id = 0
        self.tasks = {}
        self.ready = collections.deque()
        self.read_waiters = {}
        self.write_waiters = {}
        self.poller = poller(self, poller_resolution, **poller_options)
        self.poller_tid = None
        self.running = False

    def __repr__(self):
        return "<%s@0x%X tasks:%s ready:%s waiting:%s poller:%s>" % (
            self.__class__.__name__,
            id(self),
            len(self.tasks),
            fmt_list(task.tid for task in self.ready),
            self.waiting(),
            self.poller
        )

    def __len__(self):
        return len(self.tasks)

    def spawn(self, coro):
        """Add a task for the `coro` generator in the scheduler. Returns the
        new task's id."""
        tid = self.next_id + 1
        task = Task(tid, coro)
        self.next_id = tid
        self.tasks[tid] = task
        self.enqueue(task)
        log.debug("Spawned %s", task)
        return tid

    def enqueue(self, task):
        "Put a task at the end of the ready queue."
        self.ready.append(task)

    def kill(self, tid):
        """Kill the task with the `tid` id. Returns False if there's no such
        task.

        The task is removed from the ready queue and from the wait-sets and
        it's generator is closed. Errors from the generator's cleanup (eg: a
        finally clause that yields or raises) are logged and ignored. Killing
        the task that is running right now just makes sure it isn't resumed
        again.
        """
        task = self.tasks.pop(tid, None)
        if task is None:
            return False
        try:
            self.ready.remove(task)
        except ValueError:
            pass
        for waiters in (self.read_waiters, self.write_waiters):
            for sock, tasks in list(waiters.items()):
                if task in tasks:
                    tasks.remove(task)
                    if not tasks:
                        del waiters[sock]
        try:
            task.close()
        except Exception as exc:
            log.warning("Exception %r from closing killed %s ignored", exc, task)
        log.debug("Killed %s", task)
        return True

    def wait_for_read(self, sock, task):
        "Park `task` until `sock` is readable."
        self.read_waiters.setdefault(sock, []).append(task)

    def wait_for_write(self, sock, task):
        "Park `task` until `sock` is writable."
        self.write_waiters.setdefault(sock, []).append(task)

    def waiting(self):
        "Returns the number of tasks in the wait-sets."
        return sum(len(tasks) for tasks in self.read_waiters.values()) + \
            sum(len(tasks) for tasks in self.write_waiters.values())

    def poll_task(self):
        """
        The poller task. Don't block if there are other tasks to run, block
        till some socket is ready otherwise.

        It finishes when there's nothing ready and nothing waiting, as nothing
        could ever get ready again.
        """
        log.debug("Poller %s started", self.poller)
        while True:
            if self.ready:
                self.poller.run(timeout=0)
            elif self.read_waiters or self.write_waiters:
                self.poller.run(timeout=None)
            else:
                log.debug("Poller %s finished, no tasks left", self.poller)
                return
            yield

    def step(self):
        """Run the task at the head of the ready queue up to it's next yield.
        Exceptions raised by the task are propagated."""
        task = self.ready.popleft()
        if task.tid not in self.tasks:
            log.debug("Dropping killed %s", task)
            return
        try:
            value = task.run()
        except BaseException:
            log.debug("Task %s failed", task, exc_info=True)
            self.tasks.pop(task.tid, None)
            raise
        if task.tid not in self.tasks:
            # killed while it was running
            return
        if isinstance(value, SystemCall):
            try:
                value.apply(task, self)
            except BaseException:
                log.debug("%r failed for %s", value, task, exc_info=True)
                self.kill(task.tid)
                raise
        elif task.is_finished():
            del self.tasks[task.tid]
            log.debug("Finished %s", task)
        else:
            self.enqueue(task)

    def iter_run(self):
        """
        The actual processing for the main loop is here.

        Running the main loop as a generator (where a iteration is one task
        run) is usefull for interleaving the main loop with other applications
        that have a blocking main loop and require cosched to run in the same
        thread.
        """
        if self.poller_tid not in self.tasks:
            self.poller_tid = self.spawn(self.poll_task())
        self.running = True
        try:
            while self.running and self.ready:
                self.step()
                yield
        finally:
            self.running = False

    def run(self):
        """This is the main loop.
        This loop will exit when there are no more tasks to run or stop has
        been called.
        """
        for _ in self.iter_run():
            pass

    def stop(self):
        self.running = False

    def close(self):
        """Kill all the tasks and empty the wait-sets. The sockets in the
        wait-sets aren't closed, they belong to the tasks."""
        for tid in list(self.tasks):
            self.kill(tid)
        self.ready.clear()
        self.read_waiters.clear()
        self.write_waiters.clear()
