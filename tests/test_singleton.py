"""
Tests for the singleton lock (bashist/singleton.py).

Liveness is simulated with a fake probe so "live" and "dead" holders can be
set up without spawning processes; one test uses the real psutil probe with
this test process as the live holder.
"""

import os
import tempfile
import unittest
import unittest.mock
from pathlib import Path

from bashist.colors import CapabilityTable, Palette
from bashist.singleton import ensure_singleton, lock_path, read_pid


def alive(*pids):
    return lambda pid: pid in pids


class TestReadPid(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = Path(self.temp_dir.name) / "job"

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_missing_file_is_created_and_empty(self):
        self.assertIsNone(read_pid(self.path))
        self.assertTrue(self.path.exists())

    def test_reads_first_line(self):
        self.path.write_text("4242\nextra\n")
        self.assertEqual(read_pid(self.path), 4242)

    def test_garbage_is_no_holder(self):
        self.path.write_text("not a pid\n")
        self.assertIsNone(read_pid(self.path))

    def test_non_positive_is_no_holder(self):
        self.path.write_text("0\n")
        self.assertIsNone(read_pid(self.path))


class TestEnsureSingleton(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.lock_dir = Path(self.temp_dir.name)
        self.palette = Palette(CapabilityTable.from_mapping({"red": "<R>", "clear": "<C>"}))

    def tearDown(self):
        self.temp_dir.cleanup()

    def acquire(self, pid, is_alive, program="job.sh"):
        return ensure_singleton(
            "job-x", self.palette, program, pid=pid, lock_dir=self.lock_dir, is_alive=is_alive
        )

    def test_first_claim_records_pid(self):
        path = self.acquire(1001, alive())
        self.assertEqual(path, self.lock_dir / "job-x")
        self.assertEqual(read_pid(path), 1001)

    def test_second_claim_with_live_holder_is_fatal(self):
        """Two live processes: the second one dies and the record is kept."""
        self.acquire(1001, alive(1001, 1002))
        with unittest.mock.patch("sys.stderr") as mock_stderr, self.assertRaises(SystemExit) as cm:
            self.acquire(1002, alive(1001, 1002))
        self.assertEqual(cm.exception.code, 1)
        written = "".join(call.args[0] for call in mock_stderr.write.call_args_list)
        self.assertEqual(written, "<R>'job.sh' is already running! aborting...<C>\n")
        self.assertEqual(read_pid(lock_path("job-x", self.lock_dir)), 1001)

    def test_dead_holder_is_taken_over(self):
        """A stale record left by a dead process is overwritten."""
        self.acquire(1001, alive())
        path = self.acquire(1002, alive(1002))
        self.assertEqual(read_pid(path), 1002)

    def test_corrupt_record_is_taken_over(self):
        (self.lock_dir / "job-x").write_text("???")
        path = self.acquire(1002, alive(1002))
        self.assertEqual(read_pid(path), 1002)

    def test_defaults_to_own_pid(self):
        path = self.acquire(None, alive())
        self.assertEqual(read_pid(path), os.getpid())

    def test_real_probe_sees_this_process_alive(self):
        (self.lock_dir / "job-x").write_text(f"{os.getpid()}\n")
        with unittest.mock.patch("sys.stderr"), self.assertRaises(SystemExit):
            ensure_singleton("job-x", self.palette, "job.sh", pid=1, lock_dir=self.lock_dir)


class TestLockFileProblems(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.palette = Palette(CapabilityTable.empty())

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_missing_lock_dir_is_created(self):
        lock_dir = Path(self.temp_dir.name) / "nested" / "locks"
        path = ensure_singleton(
            "job-x", self.palette, "job.sh", pid=1001, lock_dir=lock_dir, is_alive=alive()
        )
        self.assertEqual(read_pid(path), 1001)

    @unittest.mock.patch("bashist.singleton.err_console")
    def test_unreadable_record_is_reported(self, mock_console):
        """A record owned by another user exits with an error, not a traceback."""
        with unittest.mock.patch(
            "bashist.singleton.read_pid", side_effect=PermissionError("Permission denied")
        ), self.assertRaises(SystemExit) as cm:
            ensure_singleton("job-x", self.palette, "job.sh", lock_dir=Path(self.temp_dir.name))
        self.assertEqual(cm.exception.code, 1)
        message = mock_console.print.call_args[0][0]
        self.assertIn("Error: could not read lock file", message)
        self.assertIn("Permission denied", message)

    @unittest.mock.patch("bashist.singleton.err_console")
    def test_unwritable_record_is_reported(self, mock_console):
        lock_dir = Path(self.temp_dir.name)
        real_open = open

        def refuse_write(path, mode="r", *args, **kwargs):
            if "w" in mode:
                raise PermissionError("Permission denied")
            return real_open(path, mode, *args, **kwargs)

        with unittest.mock.patch("builtins.open", side_effect=refuse_write), self.assertRaises(
            SystemExit
        ) as cm:
            ensure_singleton("job-x", self.palette, "job.sh", lock_dir=lock_dir, is_alive=alive())
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("could not write lock file", mock_console.print.call_args[0][0])
