import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("number", models.CharField(blank=True, max_length=50)),
                ("description", models.TextField(blank=True)),
                ("status", models.CharField(choices=[("gepland", "Gepland"), ("actief", "Actief"), ("afgerond", "Afgerond")], default="actief", max_length=20)),
                ("progress_percentage", models.PositiveSmallIntegerField(default=0)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ("name",)},
        ),
        migrations.CreateModel(
            name="WorkCode",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20, unique=True)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
                ("sort_order", models.IntegerField(default=0)),
            ],
            options={"ordering": ("sort_order", "code")},
        ),
        migrations.CreateModel(
            name="ProjectWorkCode",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("custom_code", models.CharField(blank=True, max_length=20, null=True)),
                ("custom_name", models.CharField(blank=True, max_length=200)),
                ("custom_description", models.TextField(blank=True)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="work_code_links", to="projects.project")),
                ("work_code", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="project_links", to="projects.workcode")),
            ],
            options={
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(("custom_code__isnull", True), ("work_code__isnull", False))
                            | models.Q(("custom_code__isnull", False), ("work_code__isnull", True))
                        ),
                        name="projectworkcode_exactly_one_source",
                    ),
                    models.UniqueConstraint(fields=("project", "work_code"), name="projectworkcode_unique_standard"),
                    models.UniqueConstraint(fields=("project", "custom_code"), name="projectworkcode_unique_custom"),
                ],
            },
        ),
    ]
