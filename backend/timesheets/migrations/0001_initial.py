import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("projects", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="TimeRegistration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("project_name", models.CharField(blank=True, max_length=200)),
                ("date", models.DateField()),
                ("work_code", models.CharField(max_length=20)),
                ("work_code_name", models.CharField(blank=True, max_length=200)),
                ("hours", models.DecimalField(decimal_places=2, max_digits=5)),
                ("description", models.TextField()),
                ("driven_kilometers", models.DecimalField(decimal_places=1, default=0, max_digits=8)),
                ("progress_percentage", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("status", models.CharField(default="submitted", max_length=20)),
                ("materials", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("project", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="time_registrations", to="projects.project")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="time_registrations", to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ("-date", "-created_at", "-id")},
        ),
    ]
