from bitstring import BitArray

from .disk import open_file

# Width of the native integer values are accumulated in. Longer digit runs
# wrap around exactly like two's complement int arithmetic. A value that wraps
# negative is written with a "-" the parser then skips, so it does not
# round-trip: "3000000000" comes back as 1294967296.
word_bits = 32

_digits = b"0123456789"


def wrap(value, bits=None):
    """
    Reduce value to a signed integer of the given width (word_bits by default).
    """
    if bits is None:
        bits = word_bits
    return BitArray(uint=value & ((1 << bits) - 1), length=bits).int


def read_int(handle):
    """
    Reads the next decimal integer from handle, an object with .read(n).

    Bytes before the first digit are skipped. Reading stops at the first
    non-digit after the number, which is consumed. A NUL byte ends the stream
    like end of file does. Returns None when the stream ends before any digit.
    """
    value = 0
    found = False
    while True:
        c = handle.read(1)
        if not c or c == b"\0":
            break
        if c in _digits:
            value = value * 10 + (c[0] - 48)
            found = True
        elif found:
            break
    if not found:
        return None
    return wrap(value)


def read_ints(handle):
    while True:
        value = read_int(handle)
        if value is None:
            return
        yield value


def write_int(handle, value):
    return handle.write(b"%d\n" % value)


def count_ints(*paths):
    """
    Counts the integer tokens in the given files, taken in order as one stream.
    """
    total = 0
    for path in paths:
        with open_file(path) as f:
            for _ in read_ints(f):
                total += 1
    return total
