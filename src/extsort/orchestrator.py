import os
import shutil
import tempfile

from .disk import copy_file, temp_path, temp_suffix, unlink
from .errors import NotFound, UsageError
from .id_range import IdRange, ids_needed
from .merger import merge_ints
from .process import CONTINUE, spawn, join, check, run
from .splitter import split_ints
from .tokens import count_ints

default_policy = CONTINUE


def _temp_id(path, work_dir):
    # The temp-file ID path would be named from inside work_dir, or None.
    path = os.path.abspath(path)
    if os.path.dirname(path) != os.path.abspath(work_dir):
        return None
    name = os.path.basename(path)
    if not name.endswith(temp_suffix):
        return None
    stem = name[:-len(temp_suffix)]
    if not stem.isdigit() or str(int(stem)) != stem:
        return None
    return int(stem)


def sort(source, destination, seed=0, budget=None, work_dir=None,
         policy=None, verbose=False):
    """
    Sorts the integers in source into destination. source may be destination.

    source, destination: paths of integer text files
    seed: first temp-file ID this call may use
    budget: how many IDs from seed on this call may use, None for no limit
    work_dir: directory for temp files. When None, a private directory is
              made next to destination and removed before returning.
    policy: process.CONTINUE or process.ABORT, applied to every child
    verbose: print progress

    Every step runs in its own process. The two halves are sorted by two
    concurrent processes, in temp files named from disjoint ID ranges.

    Returns the temp-file IDs used by this call and its recursive calls, in
    the order they were allocated.
    """
    if policy is None:
        policy = default_policy

    handle = spawn(count_ints, source)
    outcome = check(join(handle), policy, "count " + source, verbose)
    length = outcome.value if outcome.value is not None else 0
    if verbose:
        print("pid", handle.pid, "lines", length)

    if length <= 1:
        if os.path.abspath(source) != os.path.abspath(destination):
            run(copy_file, source, destination, policy=policy, verbose=verbose)
        return []

    assert budget is None or budget >= ids_needed(length), \
        "%d values need %d temp IDs, only %d given" % (length, ids_needed(length), budget)

    if work_dir is not None:
        used = IdRange(seed, ids_needed(length))
        for path in (source, destination):
            file_id = _temp_id(path, work_dir)
            if file_id is not None and file_id in used:
                raise UsageError("%s would be overwritten by temp file %d" % (path, file_id))
        return _sort_halves(source, destination, length, IdRange(seed, budget),
                            work_dir, policy, verbose)

    work_dir = tempfile.mkdtemp(prefix="extsort-",
                                dir=os.path.dirname(os.path.abspath(destination)))
    try:
        return _sort_halves(source, destination, length, IdRange(seed, budget),
                            work_dir, policy, verbose)
    finally:
        shutil.rmtree(work_dir)


def _sort_halves(source, destination, length, ids, work_dir, policy, verbose):
    left_id, left_ids, right_id, right_ids = ids.carve(length)
    assert ids.covers(left_ids) and ids.covers(right_ids)
    left_file = temp_path(work_dir, left_id)
    right_file = temp_path(work_dir, right_id)

    if verbose:
        print("Splitting", source, "into", left_file, "and", right_file)
    run(split_ints, source, left_file, right_file, policy=policy, verbose=verbose)

    # Both halves are sorted at the same time
    sorters = [
        spawn(sort, path, path, child.start, child.budget, work_dir, policy, verbose,
              name="sort " + path)
        for path, child in ((left_file, left_ids), (right_file, right_ids))
    ]
    outcomes = [join(h) for h in sorters]
    used = [left_id, right_id]
    for h, outcome in zip(sorters, outcomes):
        check(outcome, policy, h.name, verbose)
        used.extend(outcome.value or [])

    if verbose:
        print("Merging", left_file, "and", right_file, "into", destination)
    run(merge_ints, left_file, right_file, destination, policy=policy, verbose=verbose)

    for path in (left_file, right_file):
        try:
            unlink(path)
        except NotFound:
            if policy != CONTINUE:
                raise
            if verbose:
                print("\tNo temp file to remove:", path)
    return used
