import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="NewsArticle",
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
                ("excerpt", models.TextField(blank=True)),
                (
                    "category",
                    models.CharField(
                        choices=[("news", "News"), ("features", "Features"), ("guides", "Guides")],
                        default="news",
                        max_length=16,
                    ),
                ),
                ("author", models.CharField(blank=True, max_length=150)),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
    ]
