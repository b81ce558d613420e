from rest_framework import serializers

from taskpilot.constants.messages import ValidationErrors

GENDER_CHOICES = ["Male", "Female", "Other"]


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(required=True, allow_blank=False, max_length=100, help_text="Display name")
    email = serializers.EmailField(required=True, help_text="Login email, stored lowercased")
    password = serializers.CharField(
        required=True, allow_blank=False, write_only=True, trim_whitespace=False, help_text="Hashed before storage"
    )
    teamId = serializers.CharField(required=False, allow_blank=True, allow_null=True, help_text="Team to join")
    bio = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    position = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    gender = serializers.ChoiceField(required=False, choices=GENDER_CHOICES, allow_null=True)
    dateOfBirth = serializers.DateTimeField(required=False, allow_null=True)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.REQUIRED_FIELD.format("name"))
        return value.strip()

    def validate_teamId(self, value):
        return value or None
