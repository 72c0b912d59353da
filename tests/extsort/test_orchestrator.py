import os
import random
import shutil
import tempfile
import unittest

from src.extsort.orchestrator import sort
from src.extsort.process import ABORT, CONTINUE
from src.extsort.errors import ChildFailure, UsageError
from src.extsort.id_range import IdRange, ids_needed, temp_ids


class TestSort(unittest.TestCase):
    def setUp(self):
        self.dir = tempfile.mkdtemp()
        self.src = os.path.join(self.dir, "input.txt")
        self.dst = os.path.join(self.dir, "output.txt")

    def tearDown(self):
        shutil.rmtree(self.dir)

    def write(self, data, path=None):
        with open(path or self.src, "wb") as f:
            f.write(data)

    def read(self, path=None):
        with open(path or self.dst, "rb") as f:
            return f.read()

    def assert_only(self, *names):
        assert sorted(os.listdir(self.dir)) == sorted(names)

    def test_three_values(self):
        self.write(b"3\n1\n2\n")
        sort(self.src, self.dst)
        assert self.read() == b"1\n2\n3\n"
        self.assert_only("input.txt", "output.txt")

    def test_single_value_is_copied(self):
        self.write(b"7\n")
        sort(self.src, self.dst)
        assert self.read() == b"7\n"

    def test_single_value_copy_is_verbatim(self):
        self.write(b"  007 ;")
        sort(self.src, self.dst)
        assert self.read() == b"  007 ;"

    def test_empty(self):
        self.write(b"")
        sort(self.src, self.dst)
        assert self.read() == b""

    def test_duplicates(self):
        self.write(b"5\n5\n1\n")
        sort(self.src, self.dst)
        assert self.read() == b"1\n5\n5\n"

    def test_stray_separators(self):
        self.write(b"3,,1;2")
        sort(self.src, self.dst)
        assert self.read() == b"1\n2\n3\n"

    def test_in_place(self):
        self.write(b"9\n0\n4\n4\n2\n")
        sort(self.src, self.src)
        assert self.read(self.src) == b"0\n2\n4\n4\n9\n"
        self.assert_only("input.txt")

    def test_random(self):
        for n in (2, 8, 11):
            values = [random.randint(0, 10 ** 6) for _ in range(n)]
            self.write(b"".join(b"%d\n" % v for v in values))
            sort(self.src, self.dst, policy=ABORT)
            assert self.read() == b"".join(b"%d\n" % v for v in sorted(values))
            self.assert_only("input.txt", "output.txt")

    def test_idempotent(self):
        self.write(b"6\n2\n9\n2\n")
        sort(self.src, self.dst)
        first = self.read()
        sort(self.dst, self.dst)
        assert self.read() == first

    def test_work_dir_and_seed(self):
        work_dir = os.path.join(self.dir, "work")
        os.mkdir(work_dir)
        self.write(b"4\n3\n2\n1\n")
        used = sort(self.src, self.dst, seed=100, budget=6, work_dir=work_dir, verbose=True)
        assert self.read() == b"1\n2\n3\n4\n"
        assert os.listdir(work_dir) == []
        # IDs reported back by the recursive processes
        assert used == [100, 103, 101, 102, 104, 105]
        assert used == list(temp_ids(4, 100))
        assert all(i in IdRange(100, 6) for i in used)

    def test_ids_used_match_allocation(self):
        values = [random.randint(0, 1000) for _ in range(7)]
        self.write(b"".join(b"%d\n" % v for v in values))
        used = sort(self.src, self.dst, seed=3, policy=ABORT)
        assert self.read() == b"".join(b"%d\n" % v for v in sorted(values))
        assert used == list(temp_ids(7, 3))
        assert len(set(used)) == ids_needed(7)

    def test_base_case_uses_no_ids(self):
        self.write(b"7\n")
        assert sort(self.src, self.dst) == []

    def test_in_place_named_like_temp_file(self):
        cases = [
            ("0.out", b"3\n1\n2\n", b"1\n2\n3\n"),
            ("2.out", b"9\n7\n8\n", b"7\n8\n9\n"),
            ("5.out", b"4\n3\n2\n1\n", b"1\n2\n3\n4\n"),
        ]
        for name, data, expected in cases:
            path = os.path.join(self.dir, name)
            self.write(data, path)
            sort(path, path)
            assert self.read(path) == expected
            self.assert_only(name)
            os.remove(path)

    def test_work_dir_collision_refused(self):
        path = os.path.join(self.dir, "0.out")
        self.write(b"3\n1\n2\n", path)
        self.write(b"6\n5\n4\n")
        with self.assertRaises(UsageError):
            sort(path, path, work_dir=self.dir)
        with self.assertRaises(UsageError):
            sort(self.src, os.path.join(self.dir, "3.out"), work_dir=self.dir)
        assert self.read(path) == b"3\n1\n2\n"
        self.assert_only("0.out", "input.txt")

        # 0.out is outside the IDs from seed 1 on
        sort(path, path, seed=1, work_dir=self.dir)
        assert self.read(path) == b"1\n2\n3\n"
        self.assert_only("0.out", "input.txt")

        # Not a name a temp file is ever given
        os.remove(path)
        other = os.path.join(self.dir, "00.out")
        self.write(b"2\n1\n", other)
        sort(other, other, work_dir=self.dir)
        assert self.read(other) == b"1\n2\n"
        self.assert_only("00.out", "input.txt")

    def test_budget_too_small(self):
        self.write(b"4\n3\n2\n1\n")
        with self.assertRaises(AssertionError):
            sort(self.src, self.dst, budget=5)

    def test_missing_source_abort(self):
        with self.assertRaises(ChildFailure):
            sort(os.path.join(self.dir, "never_created"), self.dst, policy=ABORT)
        assert not os.path.exists(self.dst)

    def test_missing_source_continue(self):
        sort(os.path.join(self.dir, "never_created"), self.dst, policy=CONTINUE)
        assert not os.path.exists(self.dst)
        assert os.listdir(self.dir) == []


if __name__ == '__main__':
    unittest.main()
