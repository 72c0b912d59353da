import sys
import multiprocessing as mp
from collections import namedtuple

from .errors import SpawnFailure, ChildFailure

# multiprocessing start method for every spawned task; None uses the
# platform default.
start_method = None

# Failure policies, applied to every joined child.
CONTINUE = "continue"
ABORT = "abort"
policies = (CONTINUE, ABORT)

Outcome = namedtuple("Outcome", ["pid", "status", "value", "error"])


class Handle():
    def __init__(self, name, process, conn):
        self.name = name
        self.process = process
        self.conn = conn

    @property
    def pid(self):
        return self.process.pid


def _child_main(conn, target, args):
    # Runs in the child. The result travels back over conn; the exit code
    # only says whether target raised.
    try:
        value = target(*args)
    except Exception as e:
        conn.send((None, "%s: %s" % (type(e).__name__, e)))
        conn.close()
        sys.exit(1)
    conn.send((value, None))
    conn.close()


def spawn(target, *args, name=None):
    """
    Runs target(*args) in a new process and returns a Handle to join on.
    """
    if not callable(target):
        raise SpawnFailure("Cannot run %r" % (target,))
    if name is None:
        name = getattr(target, "__name__", repr(target))

    ctx = mp.get_context(start_method)
    recv_conn, send_conn = ctx.Pipe(duplex=False)
    process = ctx.Process(target=_child_main, args=(send_conn, target, args), name=name)
    try:
        process.start()
    except (OSError, ValueError) as e:
        recv_conn.close()
        send_conn.close()
        raise SpawnFailure("Could not start %s: %s" % (name, e)) from e
    # Only the child holds the sending end now, so recv sees EOF if it dies.
    send_conn.close()
    return Handle(name, process, recv_conn)


def join(handle):
    """
    Waits for the child to exit and returns its Outcome.
    """
    try:
        value, error = handle.conn.recv()
    except EOFError:
        value, error = None, None
    finally:
        handle.conn.close()
    handle.process.join()

    status = handle.process.exitcode
    if status != 0 and error is None:
        error = "exited with status %s" % status
    return Outcome(handle.pid, status, value, error)


def check(outcome, policy, what, verbose=False):
    """
    Applies a failure policy to a joined child. Under ABORT a failed child
    raises ChildFailure; under CONTINUE it is reported and passed through.
    """
    assert policy in policies
    if outcome.status == 0:
        return outcome
    if policy == ABORT:
        raise ChildFailure(what, outcome)
    if verbose:
        print("\t" + what, "failed, continuing:", outcome.error)
    return outcome


def run(target, *args, policy=CONTINUE, verbose=False):
    """Spawns target, joins it and applies policy to the outcome."""
    handle = spawn(target, *args)
    return check(join(handle), policy, handle.name, verbose)
