from datetime import datetime, timedelta, timezone
from http import HTTPStatus

from bson import ObjectId
from django.urls import reverse

from taskpilot.constants.role import Role
from taskpilot.tests.integration.base_mongo_test import AuthenticatedMongoTestCase


class ChatAPIIntegrationTest(AuthenticatedMongoTestCase):
    role = Role.TEAM_MEMBER

    def setUp(self):
        super().setUp()
        self.peer = self.insert_user(Role.MANAGER)

    def _create_chat(self) -> str:
        response = self.client.post(
            reverse("create_chat"), {"participantId": str(self.peer.id)}, content_type="application/json"
        )
        self.assertEqual(response.status_code, HTTPStatus.OK)
        return response.json()["chatId"]

    def _send(self, chat_id: str, content: str):
        return self.client.post(
            reverse("send_message"), {"chatId": chat_id, "content": content}, content_type="application/json"
        )

    def test_create_chat_is_idempotent_per_pair(self):
        first = self._create_chat()
        second = self._create_chat()

        self.assertEqual(first, second)
        self.assertEqual(self.db.chats.count_documents({}), 1)

    def test_send_message_updates_last_message(self):
        chat_id = self._create_chat()

        response = self._send(chat_id, "hello")

        self.assertEqual(response.status_code, HTTPStatus.CREATED)
        self.assertEqual(response.json()["readBy"][0]["user"], str(self.user.id))
        chat = self.db.chats.find_one({"chatId": chat_id})
        self.assertEqual(chat["lastMessage"]["text"], "hello")
        self.assertEqual(chat["lastMessage"]["sender"], self.user.id)

    def test_pages_are_newest_first_and_oldest_first_within(self):
        chat_id = self._create_chat()
        start = datetime.now(timezone.utc)
        self.db.messages.insert_many(
            [
                {
                    "chatId": chat_id,
                    "sender": self.user.id,
                    "content": f"m{i}",
                    "messageType": "text",
                    "readBy": [],
                    "isDeleted": False,
                    "createdAt": start + timedelta(seconds=i),
                }
                for i in range(3)
            ]
        )

        page = self.client.get(reverse("chat_messages", args=[chat_id]), {"page": 1, "limit": 2}).json()

        self.assertEqual(page["totalMessages"], 3)
        self.assertEqual(page["totalPages"], 2)
        self.assertEqual([m["content"] for m in page["messages"]], ["m1", "m2"])

    def test_peer_marks_chat_read(self):
        chat_id = self._create_chat()
        self._send(chat_id, "hi")

        self.authenticate(self.peer)
        unread = self.client.get(reverse("chat_unread_count")).json()
        response = self.client.put(reverse("chat_read", args=[chat_id]))

        self.assertEqual(unread, {chat_id: 1})
        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(self.client.get(reverse("chat_unread_count")).json(), {})

    def _receipts_for(self, message_id: str, user_id) -> int:
        message = self.db.messages.find_one({"_id": ObjectId(message_id)})
        return len([receipt for receipt in message["readBy"] if receipt["user"] == user_id])

    def test_marking_chat_read_twice_keeps_one_receipt(self):
        chat_id = self._create_chat()
        message_id = self._send(chat_id, "hi").json()["id"]

        self.authenticate(self.peer)
        first = self.client.put(reverse("chat_read", args=[chat_id]))
        second = self.client.put(reverse("chat_read", args=[chat_id]))

        self.assertEqual(first.status_code, HTTPStatus.OK)
        self.assertEqual(second.status_code, HTTPStatus.OK)
        self.assertEqual(self._receipts_for(message_id, self.peer.id), 1)

    def test_marking_message_read_twice_keeps_one_receipt(self):
        chat_id = self._create_chat()
        message_id = self._send(chat_id, "hi").json()["id"]

        self.authenticate(self.peer)
        first = self.client.put(reverse("message_read", args=[message_id]))
        second = self.client.put(reverse("message_read", args=[message_id]))

        self.assertEqual(first.status_code, HTTPStatus.OK)
        self.assertEqual(second.status_code, HTTPStatus.OK)
        self.assertEqual(self._receipts_for(message_id, self.peer.id), 1)
        self.assertEqual(self._receipts_for(message_id, self.user.id), 1)

    def test_outsider_cannot_mark_message_read(self):
        chat_id = self._create_chat()
        message_id = self._send(chat_id, "hi").json()["id"]
        outsider = self.insert_user(Role.TEAM_MEMBER)
        self.authenticate(outsider)

        response = self.client.put(reverse("message_read", args=[message_id]))

        self.assertEqual(response.status_code, HTTPStatus.FORBIDDEN)
        self.assertEqual(self._receipts_for(message_id, outsider.id), 0)

    def test_outsider_cannot_read_messages(self):
        chat_id = self._create_chat()
        self.authenticate(self.insert_user(Role.TEAM_MEMBER))

        response = self.client.get(reverse("chat_messages", args=[chat_id]))

        self.assertEqual(response.status_code, HTTPStatus.FORBIDDEN)
