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
            name="MaterialGroup",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=10, unique=True)),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={"ordering": ("code",)},
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("sku", models.CharField(max_length=100, unique=True)),
                ("ean", models.CharField(blank=True, max_length=64, null=True)),
                ("category", models.CharField(blank=True, max_length=10)),
                ("unit", models.CharField(default="stuks", max_length=20)),
                ("minimum_stock", models.DecimalField(decimal_places=3, default=0, max_digits=18)),
                ("description", models.TextField(blank=True)),
                ("supplier", models.CharField(blank=True, max_length=200)),
                ("supplier_article_number", models.CharField(blank=True, max_length=100)),
                ("price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("photo_path", models.CharField(blank=True, max_length=255)),
            ],
            options={"ordering": ("name", "id")},
        ),
        migrations.CreateModel(
            name="Location",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("type", models.CharField(choices=[("warehouse", "Magazijn"), ("vehicle", "Bus")], default="warehouse", max_length=20)),
                ("license_plate", models.CharField(blank=True, max_length=20)),
                ("description", models.TextField(blank=True)),
            ],
            options={"ordering": ("name", "id")},
        ),
        migrations.CreateModel(
            name="StockEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.DecimalField(decimal_places=3, default=0, max_digits=18)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("location", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="stock", to="inventory.location")),
                ("product", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="stock", to="inventory.product")),
            ],
            options={
                "verbose_name_plural": "stock entries",
                "unique_together": {("product", "location")},
            },
        ),
        migrations.CreateModel(
            name="InventoryTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("quantity", models.DecimalField(decimal_places=3, max_digits=18)),
                ("transaction_type", models.CharField(choices=[("in", "In"), ("out", "Uit")], max_length=3)),
                ("notes", models.TextField(blank=True)),
                ("location", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="transactions", to="inventory.location")),
                ("product", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="transactions", to="inventory.product")),
                ("project", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="transactions", to="projects.project")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ("-created_at", "-id")},
        ),
    ]
