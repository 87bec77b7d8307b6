import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies: list[tuple[str, str]] = []

    operations = [
        migrations.CreateModel(
            name="SiteSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "live_emails",
                    models.BooleanField(
                        default=False,
                        help_text=(
                            "Deliver notifications to riders. When off, everything goes to the internal catch-all."
                        ),
                    ),
                ),
                (
                    "frontend_base_url",
                    models.URLField(
                        default="http://localhost:3000",
                        help_text="Base of the cancel and event links in notification e-mails.",
                    ),
                ),
                (
                    "internal_catchall_email",
                    models.EmailField(
                        default="internal@example.com",
                        max_length=254,
                        verbose_name="Internal catch-all email",
                    ),
                ),
            ],
            options={
                "verbose_name": "Club settings",
                "verbose_name_plural": "Club settings",
            },
        ),
        migrations.CreateModel(
            name="EmailLog",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("to", models.EmailField(db_index=True, max_length=254)),
                ("subject", models.TextField()),
                (
                    "kind",
                    models.CharField(
                        blank=True, db_index=True, default="", help_text="Notification type.", max_length=64
                    ),
                ),
                ("sent_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("compressed_body", models.BinaryField(blank=True, null=True)),
                ("compressed_html", models.BinaryField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-sent_at"],
            },
        ),
    ]
