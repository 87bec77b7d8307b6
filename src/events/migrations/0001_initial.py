import uuid

import django.db.models.deletion
import django.db.models.functions.text
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("event_id", models.PositiveIntegerField(db_index=True, help_text="Event id in the event CMS.")),
                (
                    "ride_level",
                    models.CharField(
                        choices=[
                            ("level1", "Level 1"),
                            ("level2", "Level 2"),
                            ("level2plus", "Level 2+"),
                            ("level3", "Level 3"),
                            ("workshop", "Workshop"),
                        ],
                        db_index=True,
                        max_length=20,
                    ),
                ),
                ("event_type", models.CharField(default="ride", max_length=32)),
                (
                    "email",
                    models.EmailField(
                        blank=True, help_text="Guest registrant email, lowercased.", max_length=254, null=True
                    ),
                ),
                ("first_name", models.CharField(max_length=150)),
                ("last_name", models.CharField(max_length=150)),
                ("is_waitlist", models.BooleanField(default=False)),
                ("waitlist_joined_at", models.DateTimeField(blank=True, null=True)),
                ("waitlist_promoted_at", models.DateTimeField(blank=True, null=True)),
                ("cancel_token_hash", models.CharField(max_length=64, unique=True)),
                ("cancel_token_issued_at", models.DateTimeField()),
                ("cancelled_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registrations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(
                        fields=["event_id", "ride_level", "is_waitlist", "cancelled_at"],
                        name="registration_level_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("email__isnull", True), ("user__isnull", False))
                        | models.Q(("email__isnull", False), ("user__isnull", True)),
                        name="registration_member_xor_guest",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("cancelled_at__isnull", True), ("user__isnull", False)),
                        fields=("event_id", "ride_level", "user"),
                        name="unique_active_member_registration",
                    ),
                    models.UniqueConstraint(
                        models.F("event_id"),
                        models.F("ride_level"),
                        django.db.models.functions.text.Lower("email"),
                        condition=models.Q(("cancelled_at__isnull", True), ("email__isnull", False)),
                        name="unique_active_guest_registration",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="RideLevelCancellation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("event_id", models.PositiveIntegerField(db_index=True)),
                (
                    "ride_level",
                    models.CharField(
                        choices=[
                            ("level1", "Level 1"),
                            ("level2", "Level 2"),
                            ("level2plus", "Level 2+"),
                            ("level3", "Level 3"),
                            ("workshop", "Workshop"),
                        ],
                        max_length=20,
                    ),
                ),
                ("reason", models.TextField()),
                (
                    "cancelled_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="ride_level_cancellations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("event_id", "ride_level"), name="unique_ride_level_cancellation")
                ],
            },
        ),
        migrations.CreateModel(
            name="RideLevelLock",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("event_id", models.PositiveIntegerField()),
                (
                    "ride_level",
                    models.CharField(
                        choices=[
                            ("level1", "Level 1"),
                            ("level2", "Level 2"),
                            ("level2plus", "Level 2+"),
                            ("level3", "Level 3"),
                            ("workshop", "Workshop"),
                        ],
                        max_length=20,
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("event_id", "ride_level"), name="unique_ride_level_lock")
                ],
            },
        ),
    ]
