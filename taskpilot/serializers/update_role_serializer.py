from rest_framework import serializers


class UpdateRoleSerializer(serializers.Serializer):
    # The allowed transitions are enforced by UserService so the error names both roles.
    newRole = serializers.CharField(required=True, help_text="Either 'Team Member' or 'Manager'")
