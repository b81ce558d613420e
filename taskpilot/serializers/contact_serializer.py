from rest_framework import serializers

from taskpilot.constants.contact import ContactStatus


class ContactSerializer(serializers.Serializer):
    name = serializers.CharField(required=True, allow_blank=False, max_length=100)
    email = serializers.EmailField(required=True)
    subject = serializers.CharField(required=True, allow_blank=False, max_length=200)
    message = serializers.CharField(required=True, allow_blank=False, max_length=5000)


class ContactStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(required=True, choices=[status.value for status in ContactStatus])
