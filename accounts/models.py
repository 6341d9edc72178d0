from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    """
    Custom User model that extends the default Django User model
    with the daily review streak.
    """

    current_streak = models.PositiveIntegerField(default=0)
    longest_streak = models.PositiveIntegerField(default=0)
    last_review_date = models.DateTimeField(null=True, blank=True)
    streak_updated_at = models.DateTimeField(default=timezone.now)


class UserSettings(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="settings")
    email_notifications = models.BooleanField(default=True)
    review_reminders = models.BooleanField(default=True)
    public_profile = models.BooleanField(default=False)
    share_statistics = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
