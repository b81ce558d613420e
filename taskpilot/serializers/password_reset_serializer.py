from rest_framework import serializers


class ForgotPasswordSerializer(serializers.Serializer):
    # A missing email is reported by PasswordResetService with its own message.
    email = serializers.CharField(required=False, allow_blank=True, default="")


class ResetPasswordSerializer(serializers.Serializer):
    password = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)
