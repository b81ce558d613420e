from rest_framework import serializers

from taskpilot.constants.messages import ValidationErrors
from taskpilot.constants.task import TaskPriority, TaskStatus


class CreateTaskSerializer(serializers.Serializer):
    title = serializers.CharField(required=True, allow_blank=False, help_text="Title of the task")
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    project = serializers.CharField(required=True, help_text="Id of the project the task belongs to")
    assignedTo = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    status = serializers.ChoiceField(
        required=False,
        choices=[status.value for status in TaskStatus],
        default=TaskStatus.TODO.value,
    )
    priority = serializers.ChoiceField(
        required=False,
        choices=[priority.value for priority in TaskPriority],
        default=TaskPriority.MEDIUM.value,
    )
    dueDate = serializers.DateTimeField(required=False, allow_null=True)

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.REQUIRED_FIELD.format("title"))
        return value.strip()
