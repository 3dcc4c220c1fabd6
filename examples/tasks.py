from cosched.common import *

def child():
    tid = yield current_task_id()
    while True:
        print("Child task %s still alive!" % tid)
        yield

def parent():
    tid = yield current_task_id()
    child_tid = yield spawn_task(child())

    for i in range(1, 7):
        print("Parent task %s iteration %s." % (tid, i))
        yield

        if i == 3:
            yield kill_task(child_tid)

m = Scheduler()
m.spawn(parent())
m.run()
