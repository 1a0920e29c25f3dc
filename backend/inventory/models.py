from django.conf import settings
from django.db import models


class MaterialGroup(models.Model):
    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    class Meta:
        ordering = ("code",)
    def __str__(self): return f"{self.code} {self.name}"


class Product(models.Model):
    name = models.CharField(max_length=200)
    sku = models.CharField(max_length=100, unique=True)
    ean = models.CharField(max_length=64, null=True, blank=True)
    category = models.CharField(max_length=10, blank=True)  # MaterialGroup.code
    unit = models.CharField(max_length=20, default="stuks")
    minimum_stock = models.DecimalField(max_digits=18, decimal_places=3, default=0)
    description = models.TextField(blank=True)
    supplier = models.CharField(max_length=200, blank=True)
    supplier_article_number = models.CharField(max_length=100, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    photo_path = models.CharField(max_length=255, blank=True)
    class Meta:
        ordering = ("name", "id")
    def __str__(self): return f"{self.sku} - {self.name}"


class Location(models.Model):
    WAREHOUSE = "warehouse"
    VEHICLE = "vehicle"
    TYPES = ((WAREHOUSE, "Magazijn"), (VEHICLE, "Bus"))

    name = models.CharField(max_length=100)
    type = models.CharField(max_length=20, choices=TYPES, default=WAREHOUSE)
    license_plate = models.CharField(max_length=20, blank=True)
    description = models.TextField(blank=True)
    class Meta:
        ordering = ("name", "id")
    def __str__(self): return self.name


class StockEntry(models.Model):
    """Quantity on hand of one product at one location. Negative means over-booked."""
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="stock")
    location = models.ForeignKey(Location, on_delete=models.CASCADE, related_name="stock")
    quantity = models.DecimalField(max_digits=18, decimal_places=3, default=0)
    updated_at = models.DateTimeField(auto_now=True)
    class Meta:
        unique_together = (("product", "location"),)
        verbose_name_plural = "stock entries"
    def __str__(self): return f"{self.product.sku} @ {self.location.name}: {self.quantity}"


class InventoryTransaction(models.Model):
    IN = "in"
    OUT = "out"
    TYPES = ((IN, "In"), (OUT, "Uit"))

    created_at = models.DateTimeField(auto_now_add=True)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="transactions")
    location = models.ForeignKey(Location, on_delete=models.SET_NULL, null=True, blank=True, related_name="transactions")
    project = models.ForeignKey("projects.Project", on_delete=models.SET_NULL, null=True, blank=True, related_name="transactions")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    quantity = models.DecimalField(max_digits=18, decimal_places=3)  # negative = out
    transaction_type = models.CharField(max_length=3, choices=TYPES)
    notes = models.TextField(blank=True)
    class Meta:
        ordering = ("-created_at", "-id")
    def __str__(self): return f"{self.transaction_type} {self.quantity} {self.product.sku}"
