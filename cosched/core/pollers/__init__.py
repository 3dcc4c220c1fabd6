"""
Socket readiness checking backends for the poller task.
"""

def has_select():
    try:
        import select
        from . import select_impl
        return select_impl.SelectPoller
    except ImportError:
        pass


def has_poll():
    try:
        import select
        if select and hasattr(select, 'poll'):
            from . import poll_impl
            return poll_impl.PollPoller
    except ImportError:
        pass

def get_first(*imps):
    "Returns the first result that evaluates to true from a list of callables."
    for imp in imps:
        poller = imp()
        if poller:
            return poller

def has_any():
    "Returns the best available poller implementation for the current platform."
    return get_first(has_poll, has_select)

DefaultPoller = has_any()
