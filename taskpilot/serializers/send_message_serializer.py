from rest_framework import serializers

from taskpilot.constants.chat import MessageType
from taskpilot.constants.messages import ValidationErrors


class SendMessageSerializer(serializers.Serializer):
    chatId = serializers.CharField(required=True)
    content = serializers.CharField(required=True, allow_blank=False, trim_whitespace=False)
    messageType = serializers.ChoiceField(
        required=False,
        choices=[message_type.value for message_type in MessageType],
        default=MessageType.TEXT.value,
    )
    fileUrl = serializers.CharField(required=False, allow_null=True)
    fileName = serializers.CharField(required=False, allow_null=True)

    def validate_content(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.REQUIRED_FIELD.format("content"))
        return value
