from rest_framework import serializers

from .models import UserSettings


class UserSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserSettings
        fields = ["email_notifications", "review_reminders", "public_profile", "share_statistics"]
        extra_kwargs = {name: {"required": False} for name in fields}
