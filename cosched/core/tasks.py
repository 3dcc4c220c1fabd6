"""
Task wrapper for generators.
"""
__all__ = ['Task']

import types

from cosched.core.events import TaskError


class Task(object):
    '''
    We need a wrapper for generators because the scheduler wants to resume
    every task the same way, but a generator's first resume is special: it
    can't receive a value, it just runs up to the first yield.

    The first `run` returns that first yielded value without sending anything
    in, every following `run` sends `send_value` (and resets it to None).
    '''
    STATE_NEED_INIT, STATE_RUNNING, STATE_FINISHED, STATE_KILLED = range(4)
    _state_names = "NOTSTARTED", "RUNNING", "FINISHED", "KILLED"
    __slots__ = (
        'tid', 'coro', 'name', 'state', 'send_value', 'result', '__weakref__',
    )
    started = property(lambda self: self.state != self.STATE_NEED_INIT)

    def __init__(self, tid, coro):
        if not self._valid_gen(coro):
            raise TaskError("Bad generator: %r" % (coro,))
        self.tid = tid
        self.coro = coro
        self.name = getattr(coro, '__name__', coro.__class__.__name__)
        self.state = self.STATE_NEED_INIT
        self.send_value = None
        self.result = None

    def _valid_gen(self, coro):
        if isinstance(coro, types.GeneratorType):
            return True
        elif hasattr(coro, 'send') and \
             hasattr(coro, 'throw'):
            return True
        return False

    def run(self):
        """
        Make the generator progress up to the next yield and return the
        yielded value. Returns None if the generator finished (check with
        `is_finished`).

        Exceptions raised by the generator are not handled here.
        """
        assert self.state < self.STATE_FINISHED, \
            "%s ran, expected state less than %s!" % (
                self,
                self._state_names[self.STATE_FINISHED]
            )
        try:
            if self.state == self.STATE_NEED_INIT:
                self.state = self.STATE_RUNNING
                return next(self.coro)
            else:
                value, self.send_value = self.send_value, None
                return self.coro.send(value)
        except StopIteration as e:
            self.state = self.STATE_FINISHED
            self.result = e.value
        except BaseException:
            self.state = self.STATE_FINISHED
            raise

    def is_finished(self):
        return self.state >= self.STATE_FINISHED

    def close(self):
        """Mark the task killed and close the generator (runs its finally
        clauses). A generator that is executing right now is left alone."""
        if self.state < self.STATE_FINISHED:
            self.state = self.STATE_KILLED
        if not getattr(self.coro, 'gi_running', False) and \
                hasattr(self.coro, 'close'):
            self.coro.close()

    def __repr__(self):
        return "<Task %s at 0x%X wrapping %s, state: %s>" % (
            self.tid,
            id(self),
            self.name,
            self._state_names[self.state]
        )
