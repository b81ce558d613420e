import threading
from unittest import TestCase

from taskpilot.socket.presence import InMemoryPresenceDirectory


class InMemoryPresenceDirectoryTests(TestCase):
    def setUp(self):
        self.presence = InMemoryPresenceDirectory()
        self.user = {"id": "u1", "name": "Ada"}

    def test_newer_connection_replaces_older(self):
        self.presence.add("u1", "sid-1", self.user)
        self.presence.add("u1", "sid-2", self.user)

        self.assertEqual(self.presence.lookup("u1")["socketId"], "sid-2")
        self.assertEqual(len(self.presence.all()), 1)

    def test_stale_disconnect_keeps_current_entry(self):
        self.presence.add("u1", "sid-1", self.user)
        self.presence.add("u1", "sid-2", self.user)

        self.presence.remove("u1", "sid-1")

        self.assertTrue(self.presence.is_online("u1"))

    def test_remove(self):
        self.presence.add("u1", "sid-1", self.user)

        self.presence.remove("u1", "sid-1")
        self.presence.remove("u1")

        self.assertFalse(self.presence.is_online("u1"))
        self.assertEqual(self.presence.all(), [])

    def test_concurrent_adds(self):
        threads = [
            threading.Thread(target=self.presence.add, args=(f"u{i}", f"sid-{i}", {"id": f"u{i}"})) for i in range(50)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(self.presence.all()), 50)
