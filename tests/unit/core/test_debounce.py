#!/usr/bin/env python3
"""
Unit tests for the latest-wins debouncer.
"""

import threading
import unittest
from unittest.mock import patch

from core import debounce
from core.debounce import Debouncer


class TestDebouncer(unittest.TestCase):

    def test_burst_collapses_to_latest(self):
        seen = []
        fired = threading.Event()

        def record(value):
            seen.append(value)
            fired.set()

        debouncer = Debouncer(record, wait_seconds=0.05)
        for value in ["c", "cl", "clo", "clou", "cloud"]:
            debouncer.call(value)

        self.assertTrue(fired.wait(timeout=2))
        self.assertEqual(seen, ["cloud"])
        self.assertFalse(debouncer.is_pending)

    def test_flush_runs_pending_now(self):
        seen = []
        debouncer = Debouncer(seen.append, wait_seconds=60)
        debouncer.call(1)
        debouncer.call(2)

        self.assertTrue(debouncer.is_pending)
        self.assertTrue(debouncer.flush())
        self.assertEqual(seen, [2])
        self.assertFalse(debouncer.flush())

    def test_cancel_drops_pending(self):
        seen = []
        debouncer = Debouncer(seen.append, wait_seconds=60)
        debouncer.call("x")
        debouncer.cancel()

        self.assertFalse(debouncer.is_pending)
        self.assertFalse(debouncer.flush())
        self.assertEqual(seen, [])

    def test_keyword_arguments(self):
        seen = []
        debouncer = Debouncer(lambda **kw: seen.append(kw), wait_seconds=60)
        debouncer.call(query="a", domain="b")
        debouncer.flush()
        self.assertEqual(seen, [{"query": "a", "domain": "b"}])

    def test_timer_callback_errors_are_logged(self):
        logged = threading.Event()

        def explode():
            raise RuntimeError("boom")

        debouncer = Debouncer(explode, wait_seconds=0.01)
        with patch.object(debounce.logger, "exception", side_effect=lambda *a, **k: logged.set()):
            debouncer.call()
            self.assertTrue(logged.wait(timeout=2))


if __name__ == '__main__':
    unittest.main(verbosity=2)
