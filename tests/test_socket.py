__doc_all__ = []

import unittest
import socket
import sys
import time
import warnings
import datetime

from cosched.common import *
from base import pollers_available


class SocketTest_MixIn:
    def setUp(self):
        self.m = Scheduler(poller=self.poller)
        self.msgs = []
        self.a, self.b = socket.socketpair()
        self.a.setblocking(False)
        self.b.setblocking(False)

    def tearDown(self):
        self.m.close()
        self.a.close()
        self.b.close()

    def waiter(self, name, call):
        yield call
        self.msgs.append(name)

    def test_wake_order(self):
        first = self.m.spawn(self.waiter('first', wait_for_read(self.a)))
        second = self.m.spawn(self.waiter('second', wait_for_read(self.a)))
        self.m.step()
        self.m.step()
        self.assertEqual(len(self.m.read_waiters[self.a]), 2)
        self.assertEqual(self.m.waiting(), 2)
        self.assertEqual(self.m.poller.run(0), 0)
        self.b.send(b'x')
        self.assertEqual(self.m.poller.run(0), 2)
        self.assertEqual(
            [task.tid for task in self.m.ready],
            [first, second]
        )
        self.assertNotIn(self.a, self.m.read_waiters)
        self.m.run()
        self.assertEqual(self.msgs, ['first', 'second'])

    def test_directions(self):
        self.m.spawn(self.waiter('reader', wait_for_read(self.a)))
        self.m.spawn(self.waiter('writer', wait_for_write(self.a)))
        self.m.step()
        self.m.step()
        # an empty socketpair is writable but not readable
        self.assertEqual(self.m.poller.run(0), 1)
        self.assertIn(self.a, self.m.read_waiters)
        self.assertNotIn(self.a, self.m.write_waiters)
        self.m.step()
        self.assertEqual(self.msgs, ['writer'])

    def test_echo(self):
        def echo():
            yield wait_for_read(self.a)
            data = self.a.recv(1024)
            yield wait_for_write(self.a)
            self.a.send(data.upper())
        def client():
            yield wait_for_write(self.b)
            self.b.send(b'hello')
            yield wait_for_read(self.b)
            self.msgs.append(self.b.recv(1024))
        self.m.spawn(echo())
        self.m.spawn(client())
        self.m.run()
        self.assertEqual(self.msgs, [b'HELLO'])
        self.assertEqual(self.m.waiting(), 0)
        self.assertEqual(len(self.m), 0)

    def test_busy_tasks_not_blocked(self):
        def reader():
            yield wait_for_read(self.a)
            self.msgs.append(self.a.recv(1024))
        def sender():
            for i in range(3):
                yield
            self.b.send(b'late')
        self.m.spawn(reader())
        self.m.spawn(sender())
        self.m.run()
        self.assertEqual(self.msgs, [b'late'])

    def test_kill_waiting(self):
        def victim():
            try:
                yield wait_for_read(self.a)
                self.msgs.append(-1)
            finally:
                self.msgs.append('closed')
        def killer(tid):
            yield
            self.msgs.append((yield kill_task(tid)))
        tid = self.m.spawn(victim())
        self.m.spawn(killer(tid))
        self.m.run()
        self.assertEqual(self.msgs, ['closed', True])
        self.assertNotIn(self.a, self.m.read_waiters)
        # nothing left to wait on, the poller finished
        self.assertEqual(len(self.m), 0)

    def test_killed_task_dropped(self):
        def victim():
            yield
            self.msgs.append(-1)
        tid = self.m.spawn(victim())
        self.m.step()
        task = self.m.ready.popleft()
        self.m.wait_for_read(self.a, task)
        self.m.tasks.pop(tid)
        self.b.send(b'x')
        self.assertEqual(self.m.poller.run(0), 1)
        self.m.run()
        self.assertEqual(self.msgs, [])

    def test_unknown_socket(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            self.assertEqual(self.m.poller.handle_event({}, self.a), 0)
        self.assertEqual(len(caught), 1)
        self.assertIn('unknown socket', str(caught[0].message))

    def test_poll_failure(self):
        def waiter():
            yield wait_for_read(sock)
        sock = socket.socket()
        self.m.spawn(waiter())
        self.m.step()
        sock.close()
        with self.assertLogs('cosched.core.pollers.base', 'WARNING'):
            self.assertEqual(self.m.poller.run(0), 0)
        self.assertIn(sock, self.m.read_waiters)

    def test_poll_timeouts(self):
        timeouts = []
        class RecordingPoller(self.poller):
            def check(poller, readers, writers, timeout):
                timeouts.append(timeout)
                if timeout is None:
                    poller.scheduler.stop()
                    return [], []
                return super(RecordingPoller, poller).check(
                    readers, writers, timeout)
        self.m.close()
        self.m = Scheduler(poller=RecordingPoller)
        self.m.spawn(self.waiter('never', wait_for_read(self.a)))
        self.m.spawn(self.waiter('busy', None))
        self.m.run()
        # busy was ready, then only the poller was left
        self.assertEqual(timeouts, [0.0, None])
        self.assertEqual(self.msgs, ['busy'])

    def test_no_busy_loop(self):
        self.m.close()
        self.m = Scheduler(poller=self.poller, poller_resolution=0.05)
        self.m.spawn(self.waiter('never', wait_for_read(self.a)))
        iterations = 0
        started = time.time()
        for _ in self.m.iter_run():
            iterations += 1
            if time.time() - started > 0.3:
                self.m.stop()
        self.assertTrue(iterations < 30, iterations)
        self.assertEqual(self.msgs, [])

    def test_options(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            Scheduler(poller=self.poller, bogus=1)
        self.assertEqual(len(caught), 1)
        self.assertIn('Unsupported option bogus', str(caught[0].message))
        self.assertRaises(RuntimeError, Scheduler, poller=None)

    def test_resolution(self):
        self.assertRaises(ValueError, Scheduler, poller=self.poller,
                          poller_resolution=0)
        self.assertRaises(ValueError, Scheduler, poller=self.poller,
                          poller_resolution=-1)
        m = Scheduler(poller=self.poller,
                      poller_resolution=datetime.timedelta(milliseconds=50))
        self.assertEqual(m.poller.resolution, 0.05)
        self.assertEqual(Scheduler(poller=self.poller).poller.resolution, None)


for poller_cls in pollers_available:
    name = 'SocketTest_%s' % poller_cls.__name__
    globals()[name] = type(
        name,
        (SocketTest_MixIn, unittest.TestCase),
        {'poller': poller_cls}
    )

if __name__ == "__main__":
    sys.argv.insert(1, '-v')
    unittest.main()
