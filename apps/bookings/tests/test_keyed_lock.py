"""Tests for the per-key lock registry."""

from __future__ import annotations

import threading

from django.test import SimpleTestCase

from shared.infrastructure.locks import KeyedLock, LockTimeout


class KeyedLockTests(SimpleTestCase):
    def test_same_key_times_out_while_held(self) -> None:
        locks = KeyedLock()
        held = threading.Event()
        release = threading.Event()
        errors = []

        def holder():
            with locks.hold("property-1", timeout=1):
                held.set()
                release.wait(5)

        thread = threading.Thread(target=holder)
        thread.start()
        held.wait(5)
        try:
            with locks.hold("property-1", timeout=0.05):
                pass
        except LockTimeout as exc:
            errors.append(exc)
        finally:
            release.set()
            thread.join(5)

        self.assertEqual(len(errors), 1)

    def test_other_keys_are_independent(self) -> None:
        locks = KeyedLock()

        with locks.hold("property-1", timeout=0.05):
            with locks.hold("property-2", timeout=0.05):
                self.assertEqual(len(locks), 2)

    def test_entries_are_dropped_after_release(self) -> None:
        locks = KeyedLock()

        with locks.hold("property-1", timeout=0.05):
            pass
        with self.assertRaises(RuntimeError):
            with locks.hold("property-1", timeout=0.05):
                raise RuntimeError("boom")

        self.assertEqual(len(locks), 0)
