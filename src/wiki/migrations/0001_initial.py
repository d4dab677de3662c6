import uuid

import django.db.models.deletion
from django.db import migrations, models

CATEGORY_CHOICES = [
    ("characters", "Characters"),
    ("missions", "Missions"),
    ("locations", "Locations"),
    ("vehicles", "Vehicles"),
    ("weapons", "Weapons"),
    ("activities", "Activities"),
    ("collectibles", "Collectibles"),
    ("gameplay-mechanics", "Gameplay Mechanics"),
    ("updates", "Updates"),
    ("gangs", "Gangs"),
    ("media", "Media"),
    ("misc", "Misc"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="WikiPage",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("slug", models.SlugField(max_length=255, unique=True)),
                ("title", models.CharField(max_length=255)),
                ("content", models.TextField(blank=True)),
                ("image_url", models.CharField(blank=True, max_length=500)),
                ("featured", models.BooleanField(default=False)),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("published", "Published"), ("archived", "Archived")],
                        default="published",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by_uid", models.CharField(max_length=128)),
                ("created_by_name", models.CharField(blank=True, max_length=150)),
                ("last_updated_by_uid", models.CharField(max_length=128)),
                ("last_updated_by_name", models.CharField(blank=True, max_length=150)),
                ("description", models.TextField(blank=True)),
                ("category", models.CharField(choices=CATEGORY_CHOICES, max_length=32)),
                ("subcategory", models.CharField(blank=True, max_length=100)),
                ("gallery_images", models.JSONField(blank=True, default=list)),
                ("related_pages", models.JSONField(blank=True, default=list)),
                ("tags", models.JSONField(blank=True, default=list)),
            ],
            options={
                "ordering": ["-updated_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="WikiRevision",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("number", models.PositiveIntegerField()),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("content", models.TextField(blank=True)),
                ("category", models.CharField(choices=CATEGORY_CHOICES, max_length=32)),
                ("subcategory", models.CharField(blank=True, max_length=100)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("status", models.CharField(max_length=16)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user_uid", models.CharField(max_length=128)),
                ("user_display_name", models.CharField(blank=True, max_length=150)),
                ("change_description", models.CharField(blank=True, max_length=500)),
                (
                    "page",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="revisions",
                        to="wiki.wikipage",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-number"],
                "constraints": [
                    models.UniqueConstraint(fields=("page", "number"), name="unique_revision_number_per_page")
                ],
            },
        ),
    ]
