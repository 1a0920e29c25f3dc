from django.contrib import admin
from .models import MaterialGroup, Product, Location, StockEntry, InventoryTransaction

class StockEntryInline(admin.TabularInline):
    model = StockEntry
    extra = 0

@admin.register(MaterialGroup)
class MaterialGroupAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "is_active")
    search_fields = ("code", "name")

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("sku", "name", "ean", "category", "unit", "minimum_stock")
    list_filter = ("category",)
    search_fields = ("sku", "name", "ean", "supplier_article_number")
    inlines = [StockEntryInline]

@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "license_plate")
    list_filter = ("type",)
    search_fields = ("name", "license_plate")

@admin.register(StockEntry)
class StockEntryAdmin(admin.ModelAdmin):
    list_display = ("product", "location", "quantity", "updated_at")
    list_filter = ("location",)
    search_fields = ("product__sku", "product__name")

@admin.register(InventoryTransaction)
class InventoryTransactionAdmin(admin.ModelAdmin):
    list_display = ("created_at", "transaction_type", "product", "quantity", "location", "project", "user")
    list_filter = ("transaction_type", "location")
