"""
Mischelaneous or common.
"""
__all__ = ['fmt_list', 'timeout_seconds']

import datetime


def fmt_list(lst, lim=10):
    "Repr for a list, showing at most `lim` items."
    lst = list(lst)
    if len(lst) > lim:
        return "[%s .. %s more]" % (
            ', '.join(repr(i) for i in lst[:lim]),
            len(lst) - lim
        )
    else:
        return repr(lst)

def timeout_seconds(timeout):
    """
    Normalize a poll timeout to a float number of seconds or None.

    * None - wait indefinitely
    * 0 - don't wait
    * a number of seconds or a timedelta
    """
    if timeout is None:
        return None
    if isinstance(timeout, datetime.timedelta):
        timeout = timeout.total_seconds()
    if timeout < 0:
        raise ValueError("Negative timeout: %r" % (timeout,))
    return float(timeout)
