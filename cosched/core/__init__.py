'''
Generator based tasks, a FIFO scheduler and socket readiness polling.

The generator yields a `SystemCall` instance (or any other value, which just
gives up control) and will receive the value the system call decided on when
it is resumed.

Example::

    def mytask(sock):
        tid = yield current_task_id()
        yield wait_for_read(sock)
        data = sock.recv(1024)
        child = yield spawn_task(other(data))
        yield

* the `system call` instructs the scheduler what to do with the task: park it
  till a socket is ready, add another task in the scheduler, kill a task and
  so on.

* the `system calls` live in the events module; the socket ones
  (`wait_for_read`, `wait_for_write`) only register interest, the actual
  recv/send/accept on the socket is done by the task itself after it's
  resumed.

* if a `system call` has a value associated then the yield will return that
  value (a task id or a bool) otherwise it will return None.

The scheduler runs a poller task besides the tasks you add. The poller is
where the process blocks waiting for sockets, and it only blocks when nothing
else is ready to run.
'''
