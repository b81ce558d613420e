from rest_framework import serializers

from taskpilot.serializers.register_serializer import GENDER_CHOICES


class UpdateProfileSerializer(serializers.Serializer):
    """All fields optional; blank values leave the stored value unchanged."""

    name = serializers.CharField(required=False, allow_blank=True, max_length=100)
    bio = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    dateOfBirth = serializers.DateTimeField(required=False, allow_null=True)
    position = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    gender = serializers.ChoiceField(required=False, choices=GENDER_CHOICES, allow_blank=True, allow_null=True)
    profilePicture = serializers.CharField(required=False, allow_blank=True, allow_null=True)
