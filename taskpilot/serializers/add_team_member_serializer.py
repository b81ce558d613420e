from rest_framework import serializers


class AddTeamMemberSerializer(serializers.Serializer):
    memberId = serializers.CharField(required=True, help_text="User id to add to the team")
