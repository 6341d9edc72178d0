import structlog

from .models import UserSettings

logger = structlog.get_logger()

SETTINGS_FIELDS = ("email_notifications", "review_reminders", "public_profile", "share_statistics")


def get_user_settings(user):
    preferences, created = UserSettings.objects.get_or_create(user=user)
    if created:
        logger.info("user_settings_created", user_id=str(user.pk))
    return preferences


def update_user_settings(user, **changes):
    preferences = get_user_settings(user)
    fields = [key for key in SETTINGS_FIELDS if key in changes]
    for key in fields:
        setattr(preferences, key, changes[key])
    if fields:
        preferences.save(update_fields=[*fields, "updated_at"])
    logger.info("user_settings_updated", user_id=str(user.pk), fields=fields)
    return preferences
