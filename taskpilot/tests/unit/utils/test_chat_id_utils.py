from unittest import TestCase
from unittest.mock import patch

from taskpilot.utils.chat_id_utils import generate_chat_id


class GenerateChatIdTests(TestCase):
    @patch("taskpilot.utils.chat_id_utils.time.time", return_value=1718000000.5)
    def test_format(self, mock_time):
        chat_id = generate_chat_id()

        prefix, epoch_ms, suffix = chat_id.split("_")
        self.assertEqual(prefix, "chat")
        self.assertEqual(epoch_ms, "1718000000500")
        self.assertRegex(suffix, r"^[0-9a-z]{9}$")

    def test_ids_are_unique(self):
        self.assertEqual(len({generate_chat_id() for _ in range(200)}), 200)
