"""
A module for quick importing the essential core stuff.
(Scheduler, Task, SystemCall, the system calls, events, pollers)
"""
from .core.schedulers import Scheduler
from .core.tasks import Task
from .core.events import SystemCall, wait_for_read, wait_for_write, \
                         spawn_task, kill_task, current_task_id
from .core import events
from .core import pollers
