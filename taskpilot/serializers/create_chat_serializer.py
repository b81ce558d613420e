from rest_framework import serializers

from taskpilot.constants.chat import ChatType


class CreateChatSerializer(serializers.Serializer):
    participantId = serializers.CharField(required=True)
    chatType = serializers.ChoiceField(
        required=False,
        choices=[chat_type.value for chat_type in ChatType if chat_type != ChatType.TEAM],
        default=ChatType.DIRECT.value,
    )


class CreateTeamChatSerializer(serializers.Serializer):
    teamId = serializers.CharField(required=True)
