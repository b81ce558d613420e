from rest_framework import serializers

from taskpilot.constants.project import ProjectStatus


class UpdateProjectSerializer(serializers.Serializer):
    # No defaults: only the fields present in the body end up in validated_data.
    name = serializers.CharField(required=False, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(required=False, choices=[status.value for status in ProjectStatus])
    deadline = serializers.DateTimeField(required=False, allow_null=True)
    teamMembers = serializers.ListField(child=serializers.CharField(), required=False)
    projectManager = serializers.CharField(required=False, allow_blank=True, allow_null=True)
