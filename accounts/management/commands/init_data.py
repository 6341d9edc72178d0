import json
import os

from django.core.management.base import BaseCommand
from django.db import DatabaseError

from accounts.models import User
from scheduler.errors import SchedulerError
from scheduler.services.cards import create_card
from scheduler.services.schedules import get_or_create_schedule


class Command(BaseCommand):
    help = "Reset users and seed demo accounts with a default schedule and cards"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file", default="MOCK_DATA.json", help="JSON file name to load cards from"
        )

    def handle(self, *args, **options):
        User.objects.all().delete()

        self.stdout.write(self.style.SUCCESS("All existing user data has been deleted"))

        file_name = options.get("file", "MOCK_DATA.json")
        json_file_path = os.path.join(os.path.dirname(__file__), file_name)

        try:
            with open(json_file_path) as json_file:
                words = json.load(json_file)
        except (OSError, ValueError) as e:
            self.stdout.write(self.style.ERROR(f"Error loading data: {e}"))
            words = []

        users = [
            User.objects.create_superuser(
                "testuser", email="testuser@example.com", password="testpassword"
            )
        ]
        for i in range(1, 6):
            users.append(
                User.objects.create_user(
                    f"testuser{i}",
                    email=f"testuser{i}@example.com",
                    password="testpassword",
                )
            )

        created = 0
        for user in users:
            get_or_create_schedule(user.pk)
            for entry in words:
                try:
                    create_card(
                        user.pk,
                        entry["word"],
                        entry["definition"],
                        word_details=entry.get("word_details"),
                    )
                    created += 1
                except (KeyError, SchedulerError, DatabaseError) as e:
                    self.stdout.write(self.style.WARNING(f"Skipped {entry!r}: {e}"))

        self.stdout.write(
            self.style.SUCCESS(
                f"Mock data loaded from {file_name}: {len(users)} users, {created} cards"
            )
        )
