import authentication.models
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="UserAccount",
            fields=[
                ("uid", models.CharField(max_length=128, primary_key=True, serialize=False)),
                ("display_name", models.CharField(blank=True, max_length=150)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("photo_url", models.URLField(blank=True, max_length=500, null=True)),
                ("provider", models.CharField(default="unknown", max_length=50)),
                ("is_admin", models.BooleanField(default=False)),
                ("is_online", models.BooleanField(default=False)),
                ("preferences", models.JSONField(default=authentication.models.default_preferences)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("last_updated", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
