from rest_framework import serializers
from .models import MaterialGroup, Product, Location, StockEntry, InventoryTransaction
from projects.models import Project


class MaterialGroupSerializer(serializers.ModelSerializer):
    class Meta:
        model = MaterialGroup
        fields = "__all__"

class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = "__all__"

class LocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Location
        fields = "__all__"

class StockEntrySerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    product_sku = serializers.CharField(source="product.sku", read_only=True)
    unit = serializers.CharField(source="product.unit", read_only=True)
    location_name = serializers.CharField(source="location.name", read_only=True)
    class Meta:
        model = StockEntry
        fields = ("id", "product", "product_name", "product_sku", "unit",
                  "location", "location_name", "quantity", "updated_at")
        read_only_fields = ("product", "location", "updated_at")

class LowStockSerializer(StockEntrySerializer):
    minimum_stock = serializers.DecimalField(source="product.minimum_stock", max_digits=18,
                                             decimal_places=3, read_only=True)
    class Meta(StockEntrySerializer.Meta):
        fields = StockEntrySerializer.Meta.fields + ("minimum_stock",)

class InventoryTransactionSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    location_name = serializers.CharField(source="location.name", read_only=True, default=None)
    project_name = serializers.CharField(source="project.name", read_only=True, default=None)
    user_name = serializers.CharField(source="user.username", read_only=True, default=None)
    class Meta:
        model = InventoryTransaction
        fields = "__all__"
        read_only_fields = ("created_at", "user", "transaction_type")


# ------------------- Workflow payloads -------------------

class BookingLineSerializer(serializers.Serializer):
    # incomplete lines are allowed here, book_out drops them
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all(), required=False, allow_null=True)
    location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all(), required=False, allow_null=True)
    quantity = serializers.CharField(required=False, allow_null=True, allow_blank=True)

class BookOutSerializer(serializers.Serializer):
    project = serializers.PrimaryKeyRelatedField(queryset=Project.objects.all(),
                                                 required=False, allow_null=True)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    lines = BookingLineSerializer(many=True)

class ReceiveSerializer(serializers.Serializer):
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())
    location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all())
    quantity = serializers.CharField()
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)

class MoveSerializer(serializers.Serializer):
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())
    from_location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all())
    to_location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all())
    quantity = serializers.CharField()

class RelocateSerializer(serializers.Serializer):
    stock = serializers.PrimaryKeyRelatedField(queryset=StockEntry.objects.select_related("product", "location"),
                                               many=True)
    to_location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all())

class ScanSerializer(serializers.Serializer):
    code = serializers.CharField(trim_whitespace=True)
