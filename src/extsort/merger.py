from .disk import open_file, create_file
from .tokens import read_int, write_int


def merge_ints(source_a, source_b, destination):
    """
    Merges two sorted integer files into destination. On equal values the one
    from source_a is written first. Returns the number of values written.
    """
    written = 0
    with open_file(source_a) as fa, open_file(source_b) as fb, \
            create_file(destination) as fout:
        a = read_int(fa)
        b = read_int(fb)
        while a is not None or b is not None:
            if a is not None and (b is None or a <= b):
                write_int(fout, a)
                a = read_int(fa)
            else:
                write_int(fout, b)
                b = read_int(fb)
            written += 1
    return written
