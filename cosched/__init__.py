# -*- coding: utf-8 -*-
'''
This is a library for cooperative multitasking with generators on a single
thread, with non-blocking socket readiness folded into the same run loop.

Each generator is wrapped in a `Task`. A task yields either a plain value
(give up control, resume me later) or a `SystemCall` that asks the scheduler
to do something the generator can't do to itself: spawn or kill a task, tell
it its own id, or park it until a socket is readable/writable.

::

    Roughly the cosched internals works like this:

    +------------------------+
    | def foo():             |
    |     ...                |           syscall.apply(task, sched)
    |  +->value = yield call-|----------------+------------+
    |  |  ...                |                |            |
    +--|---------------------+    +---------------+  +---------------------+
       |                          | the call is   |  | the call parks the  |
      task.send_value = value     | done (spawn,  |  | task in a wait-set  |
       |                          | kill, tid)    |  | (read or write)     |
      scheduler runs foo          +------|--------+  +----------|----------+
       |                                 |                      |
      foo gets in the ready              |                      |
      queue                              |                      |
       |                                 |                      |
       +----------------------<----------+                      |
       |                                                        |
       |      socket is ready        the poller task            |
       +-------------<------------  ......  checks it  <--------+

    The scheduler basicaly does 2 things:
     - runs ready tasks in FIFO order
     - applies the system calls they yield

    The poller task (a task like any other) does 2 things:
     - calls the system to check what sockets are ready (without blocking if
       other tasks are ready, blocking otherwise)
     - puts the tasks waiting on ready sockets back in the ready queue
'''

__license__ = u'''
Copyright (c) 2007, Mărieş Ionel Cristian

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
THE SOFTWARE.
'''

__version__ = '0.1.0'

from cosched import core
from cosched import common
