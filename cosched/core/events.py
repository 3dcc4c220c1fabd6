"""
System calls (the privileged operations a task can yield) and the
scheduler's exceptions.
"""
__all__ = [
    'SchedulerError', 'TaskError', 'SystemCall', 'wait_for_read',
    'wait_for_write', 'spawn_task', 'kill_task', 'current_task_id'
]


class SchedulerError(Exception):
    "Base class for the errors raised by the scheduler itself."

class TaskError(SchedulerError, ValueError):
    "Raised when a task is created from something that isn't a generator."


class SystemCall(object):
    """A deferred operation over a (task, scheduler) pair.

    Eg:

    .. sourcecode:: python

        yield SystemCall(lambda task, sched: sched.enqueue(task))

    * effect - a callable taking the yielding task and the scheduler. It is
      called exactly once, when the task yields the system call. The effect
      decides what happens to the task: put it back in the ready queue
      (usualy after setting `task.send_value`), park it in a wait-set, or
      nothing at all.

    A plain yield (anything that isn't a SystemCall) just gives up control and
    the task is resumed with None.
    """
    __slots__ = ['effect', 'name']

    def __init__(self, effect, name=None):
        if not callable(effect):
            raise TypeError("SystemCall effect must be callable, got %r" % (effect,))
        self.effect = effect
        self.name = name or getattr(effect, '__name__', 'effect')

    def apply(self, task, sched):
        return self.effect(task, sched)

    __call__ = apply

    def __repr__(self):
        return "<%s %s at 0x%X>" % (self.__class__.__name__, self.name, id(self))


def wait_for_read(sock):
    """
    Park the task until `sock` is readable. The task leaves the ready queue
    and is put back by the poller task.

    .. sourcecode:: python

        yield wait_for_read(sock)
        data = sock.recv(8192)

    * sock - anything with a fileno() (or a file descriptor number)
    """
    def wait_for_read(task, sched):
        sched.wait_for_read(sock, task)
    return SystemCall(wait_for_read)

def wait_for_write(sock):
    """
    Park the task until `sock` is writable. See `wait_for_read`.
    """
    def wait_for_write(task, sched):
        sched.wait_for_write(sock, task)
    return SystemCall(wait_for_write)

def spawn_task(coro):
    """
    Add a new task in the scheduler. The calling task is resumed with the new
    task's id.

    .. sourcecode:: python

        tid = yield spawn_task(child())
    """
    def spawn_task(task, sched):
        task.send_value = sched.spawn(coro)
        sched.enqueue(task)
    return SystemCall(spawn_task)

def kill_task(tid):
    """
    Kill the task with the `tid` id. The calling task is resumed with True if
    there was such a task, False otherwise.

    .. sourcecode:: python

        killed = yield kill_task(tid)
    """
    def kill_task(task, sched):
        task.send_value = sched.kill(tid)
        sched.enqueue(task)
    return SystemCall(kill_task)

def current_task_id():
    """
    The calling task is resumed with it's own id.

    .. sourcecode:: python

        tid = yield current_task_id()
    """
    def current_task_id(task, sched):
        task.send_value = task.tid
        sched.enqueue(task)
    return SystemCall(current_task_id)
