from rest_framework import serializers

from taskpilot.constants.messages import ValidationErrors


class CreateTeamSerializer(serializers.Serializer):
    name = serializers.CharField(required=True, max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    managerId = serializers.CharField(required=True, help_text="User id of the Manager who will lead the team")

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.REQUIRED_FIELD.format("name"))
        return value.strip()
