import uuid

import django.db.models.deletion
from django.db import migrations, models

CATEGORY_CHOICES = [
    ("Music", "Music"),
    ("Arts & Culture", "Arts & Culture"),
    ("Concerts", "Concerts"),
    ("Sports & Wellness", "Sports & Wellness"),
    ("Technology", "Technology"),
    ("Fundraising", "Fundraising"),
    ("Comedy", "Comedy"),
    ("Poetry", "Poetry"),
    ("Drama", "Drama"),
    ("Exhibitions", "Exhibitions"),
    ("Networking", "Networking"),
    ("Education", "Education"),
    ("Food & Drinks", "Food & Drinks"),
    ("Nightlife", "Nightlife"),
    ("Festivals", "Festivals"),
    ("Other", "Other"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("category", models.CharField(choices=CATEGORY_CHOICES, max_length=32)),
                ("organizer_id", models.UUIDField()),
                ("organizer_name", models.CharField(blank=True, default="", max_length=255)),
                ("starts_at", models.DateTimeField()),
                ("ends_at", models.DateTimeField()),
                ("venue_name", models.CharField(max_length=255)),
                ("venue_address", models.CharField(blank=True, default="", max_length=255)),
                ("venue_city", models.CharField(max_length=100)),
                ("latitude", models.FloatField()),
                ("longitude", models.FloatField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("published", "Published"),
                            ("ongoing", "Ongoing"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="draft",
                        max_length=16,
                    ),
                ),
                ("rating_mean", models.FloatField(default=0.0)),
                ("rating_count", models.PositiveIntegerField(default=0)),
                ("like_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["starts_at"],
                "indexes": [models.Index(fields=["status", "starts_at"], name="discovery_event_status_idx")],
            },
        ),
        migrations.CreateModel(
            name="InterestProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id", models.UUIDField(unique=True)),
                ("preferred_categories", models.JSONField(blank=True, default=list)),
                (
                    "price_preference",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("free", "Free"),
                            ("budget", "Budget"),
                            ("moderate", "Moderate"),
                            ("premium", "Premium"),
                            ("any", "Any"),
                        ],
                        default="",
                        max_length=16,
                    ),
                ),
                ("preferred_city", models.CharField(blank=True, default="", max_length=100)),
                ("max_travel_distance_km", models.FloatField(blank=True, null=True)),
                ("followed_organizer_ids", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="TicketType",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=100)),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("quantity", models.PositiveIntegerField()),
                ("sold", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ticket_types",
                        to="discovery.event",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["event"], name="discovery_ticket_event_idx")],
            },
        ),
        migrations.CreateModel(
            name="CategoryInteraction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("category", models.CharField(choices=CATEGORY_CHOICES, max_length=32)),
                (
                    "interaction_type",
                    models.CharField(
                        choices=[
                            ("view", "View"),
                            ("like", "Like"),
                            ("share", "Share"),
                            ("purchase", "Purchase"),
                        ],
                        max_length=16,
                    ),
                ),
                ("count", models.PositiveIntegerField(default=0)),
                (
                    "profile",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="interactions",
                        to="discovery.interestprofile",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(
                        fields=("profile", "category", "interaction_type"),
                        name="unique_profile_category_interaction",
                    )
                ],
            },
        ),
    ]
