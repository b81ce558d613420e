from rest_framework import serializers

from taskpilot.constants.messages import ValidationErrors
from taskpilot.constants.project import ProjectStatus


class CreateProjectSerializer(serializers.Serializer):
    name = serializers.CharField(required=True, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(
        required=False,
        choices=[status.value for status in ProjectStatus],
        default=ProjectStatus.PENDING.value,
    )
    deadline = serializers.DateTimeField(required=False, allow_null=True)
    teamMembers = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    projectManager = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text="Only honoured for Admins; a Manager always manages their own projects",
    )

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.REQUIRED_FIELD.format("name"))
        return value.strip()
