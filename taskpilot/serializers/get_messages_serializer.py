from django.conf import settings
from rest_framework import serializers

from taskpilot.constants.messages import ValidationErrors


class GetMessagesQueryParamsSerializer(serializers.Serializer):
    page = serializers.IntegerField(
        required=False,
        default=settings.CHAT["DEFAULT_PAGE"],
        min_value=1,
        error_messages={"min_value": ValidationErrors.PAGE_POSITIVE},
    )
    limit = serializers.IntegerField(
        required=False,
        default=settings.CHAT["DEFAULT_PAGE_LIMIT"],
        min_value=1,
        error_messages={"min_value": ValidationErrors.LIMIT_POSITIVE},
    )
