from unittest import TestCase

from django.conf import settings

from taskpilot.constants.messages import ValidationErrors
from taskpilot.serializers.get_messages_serializer import GetMessagesQueryParamsSerializer


class GetMessagesQueryParamsSerializerTest(TestCase):
    def test_defaults_come_from_settings(self):
        serializer = GetMessagesQueryParamsSerializer(data={})

        self.assertTrue(serializer.is_valid())
        self.assertEqual(serializer.validated_data["page"], settings.CHAT["DEFAULT_PAGE"])
        self.assertEqual(serializer.validated_data["limit"], settings.CHAT["DEFAULT_PAGE_LIMIT"])

    def test_query_strings_are_coerced(self):
        serializer = GetMessagesQueryParamsSerializer(data={"page": "3", "limit": "20"})

        self.assertTrue(serializer.is_valid())
        self.assertEqual(serializer.validated_data["page"], 3)
        self.assertEqual(serializer.validated_data["limit"], 20)

    def test_rejects_non_positive_values(self):
        serializer = GetMessagesQueryParamsSerializer(data={"page": "0", "limit": "-1"})

        self.assertFalse(serializer.is_valid())
        self.assertEqual(str(serializer.errors["page"][0]), ValidationErrors.PAGE_POSITIVE)
        self.assertEqual(str(serializer.errors["limit"][0]), ValidationErrors.LIMIT_POSITIVE)
