from rest_framework import serializers

from taskpilot.constants.messages import ValidationErrors


class CommentSerializer(serializers.Serializer):
    text = serializers.CharField(required=True, allow_blank=False, max_length=2000)

    def validate_text(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.REQUIRED_FIELD.format("text"))
        return value
