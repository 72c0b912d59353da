import os

from .errors import NotFound, IOFault

# Bytes held in memory at once while copying a file.
memory_size = 1000000
temp_suffix = ".out"


def _check_path(path):
    if not isinstance(path, str):
        raise NotFound(path, "path must be a string")
    if not path:
        raise NotFound(path, "empty path")
    if "\0" in path:
        raise NotFound(path, "path contains NUL")


def _buffer(buf, length, writable):
    try:
        view = memoryview(buf).cast("B")
    except TypeError:
        raise IOFault("Not a bytes-like buffer: %r" % (buf,))
    if length < 0 or length > len(view):
        raise IOFault("Buffer of %d bytes cannot hold %d bytes" % (len(view), length))
    if writable and view.readonly and length > 0:
        raise IOFault("Buffer is read-only")
    return view


def open_file(path):
    _check_path(path)
    try:
        return open(path, "rb")
    except OSError as e:
        raise NotFound(path, e.strerror)


def create_file(path):
    _check_path(path)
    try:
        return open(path, "wb")
    except OSError as e:
        raise NotFound(path, e.strerror)


def read(handle, buf, length):
    """
    Reads up to length bytes from handle into buf.
    Returns the number of bytes read, 0 at end of file.
    """
    view = _buffer(buf, length, writable=True)
    if length == 0:
        return 0
    return handle.readinto(view[:length])


def write(handle, buf, length):
    view = _buffer(buf, length, writable=False)
    if length == 0:
        return 0
    return handle.write(view[:length])


def unlink(path):
    _check_path(path)
    try:
        os.remove(path)
    except OSError as e:
        raise NotFound(path, e.strerror)


def copy_file(source, destination):
    """
    Copies source to destination byte for byte, memory_size bytes at a time.
    Returns the number of bytes copied.
    """
    memcache = bytearray(memory_size)
    total = 0
    with open_file(source) as fin, create_file(destination) as fout:
        while True:
            amount = read(fin, memcache, len(memcache))
            if not amount:
                break
            write(fout, memcache, amount)
            total += amount
    return total


def temp_path(work_dir, file_id):
    assert file_id >= 0
    return os.path.join(work_dir, str(file_id) + temp_suffix)
