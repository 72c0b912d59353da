class ExtSortError(Exception):
    pass


class UsageError(ExtSortError):
    pass


class NotFound(ExtSortError):
    """
    A path did not resolve to a readable file, or could not be created
    for writing.
    """

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        msg = "No such file: %r" % (path,)
        if reason:
            msg += " (" + reason + ")"
        ExtSortError.__init__(self, msg)


class IOFault(ExtSortError):
    """The buffer given to a read or write is not usable for the transfer."""
    pass


class SpawnFailure(ExtSortError):
    pass


class ChildFailure(ExtSortError):
    def __init__(self, what, outcome):
        self.what = what
        self.outcome = outcome
        ExtSortError.__init__(self, "%s failed (pid %s, status %s): %s" % (
            what, outcome.pid, outcome.status, outcome.error))
