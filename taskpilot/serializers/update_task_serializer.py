from rest_framework import serializers

from taskpilot.constants.task import TaskPriority, TaskStatus


class UpdateTaskSerializer(serializers.Serializer):
    """
    Shape check only. Which of these fields a caller may actually change
    depends on their role and is decided by TaskService.update_task.
    """

    title = serializers.CharField(required=False, allow_blank=False)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(required=False, choices=[status.value for status in TaskStatus])
    priority = serializers.ChoiceField(required=False, choices=[priority.value for priority in TaskPriority])
    dueDate = serializers.DateTimeField(required=False, allow_null=True)
    assignedTo = serializers.ListField(child=serializers.CharField(), required=False)
