# inventory/views.py

from django.conf import settings
from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated

from accounts.permissions import IsOfficeStaff, IsOfficeStaffOrReadOnly

from .booking import (
    BookingLine, book_out, delete_transaction, edit_transaction, low_stock_alerts,
    move_stock, receive_stock, relocate_stock, set_stock_quantity,
)
from .models import InventoryTransaction, Location, MaterialGroup, Product, StockEntry
from .selection import browse_by_location, fuzzy_candidates, scan, search_product
from .serializers import (
    BookOutSerializer, InventoryTransactionSerializer, LocationSerializer, LowStockSerializer,
    MaterialGroupSerializer, MoveSerializer, ProductSerializer, ReceiveSerializer,
    RelocateSerializer, ScanSerializer, StockEntrySerializer,
)
from .utils import format_quantity, respond


# ------------------- ViewSets (CRUD) -------------------

class ProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    permission_classes = [IsOfficeStaffOrReadOnly]

    def get_queryset(self):
        qs = Product.objects.all().order_by("name", "id")
        category = self.request.query_params.get("category")
        if category:
            qs = qs.filter(category=category)
        return qs


class MaterialGroupViewSet(viewsets.ModelViewSet):
    queryset = MaterialGroup.objects.all().order_by("code")
    serializer_class = MaterialGroupSerializer
    permission_classes = [IsOfficeStaffOrReadOnly]


class LocationViewSet(viewsets.ModelViewSet):
    queryset = Location.objects.all().order_by("name", "id")
    serializer_class = LocationSerializer
    permission_classes = [IsOfficeStaffOrReadOnly]


class StockEntryViewSet(mixins.ListModelMixin,
                        mixins.RetrieveModelMixin,
                        mixins.UpdateModelMixin,
                        mixins.DestroyModelMixin,
                        viewsets.GenericViewSet):
    serializer_class = StockEntrySerializer
    permission_classes = [IsOfficeStaffOrReadOnly]

    def get_queryset(self):
        qs = StockEntry.objects.select_related("product", "location").order_by("product__name", "location__name")
        params = self.request.query_params
        if params.get("location"):
            qs = qs.filter(location_id=params["location"])
        if params.get("product"):
            qs = qs.filter(product_id=params["product"])
        return qs

    def perform_update(self, serializer):
        entry = serializer.instance
        quantity = serializer.validated_data.get("quantity", entry.quantity)
        serializer.instance = set_stock_quantity(entry.product, entry.location, quantity)


class InventoryTransactionViewSet(mixins.ListModelMixin,
                                  mixins.RetrieveModelMixin,
                                  mixins.UpdateModelMixin,
                                  mixins.DestroyModelMixin,
                                  viewsets.GenericViewSet):
    """Ledger. Corrections change the row only, stock stays as booked."""
    serializer_class = InventoryTransactionSerializer
    permission_classes = [IsOfficeStaffOrReadOnly]

    def get_queryset(self):
        qs = (InventoryTransaction.objects
              .select_related("product", "location", "project", "user")
              .order_by("-created_at", "-id"))
        params = self.request.query_params
        for key in ("product", "location", "project"):
            if params.get(key):
                qs = qs.filter(**{f"{key}_id": params[key]})
        if params.get("type"):
            qs = qs.filter(transaction_type=params["type"])
        return qs

    def perform_update(self, serializer):
        edit_transaction(serializer.instance, **serializer.validated_data)

    def perform_destroy(self, instance):
        delete_transaction(instance)


# ------------------- Health -------------------

@api_view(["GET"])
@permission_classes([AllowAny])
def health(request):
    return JsonResponse({"status": "ok"})


# ------------------- Material selection -------------------

def _selection_payload(res):
    return {
        "query": res.query,
        "candidates": ProductSerializer(res.candidates, many=True).data,
        "selected": ProductSerializer(res.selected).data if res.selected else None,
        "dropdown_open": res.dropdown_open,
    }


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def product_search(request):
    """
    GET /api/products/search/?q=<name, sku or ean>
    Candidates in catalog order; an exact EAN/SKU hit is selected directly.
    Without candidates, fuzzy "did you mean" suggestions are returned.
    """
    q = (request.query_params.get("q") or "").strip()
    res = search_product(q)
    payload = _selection_payload(res)
    payload["suggestions"] = []

    if res.selected is not None:
        return respond(payload, f"{res.selected.sku} - {res.selected.name} geselecteerd.")
    if res.candidates:
        return respond(payload, f"{len(res.candidates)} producten gevonden.")
    min_length = settings.BACKOFFICE["MIN_QUERY_LENGTH"]
    if len(q) < min_length:
        return respond(payload, f"Typ minimaal {min_length} tekens.")

    payload["suggestions"] = fuzzy_candidates(q)
    if payload["suggestions"]:
        best = payload["suggestions"][0]
        return respond(payload, f'Bedoel je {best["sku"]} - {best["name"]}?')
    return respond(payload, f"Geen producten gevonden voor {q}.")


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def product_scan(request):
    """
    POST /api/products/scan/
    Body: { "code": "<decoded barcode>" }
    """
    ser = ScanSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    code = ser.validated_data["code"]
    res = scan(code)
    payload = _selection_payload(res)

    if res.selected is not None:
        return respond(payload, f"{res.selected.sku} - {res.selected.name} gescand.")
    if res.candidates:
        return respond(payload, f"{len(res.candidates)} producten gevonden voor {code}.")
    payload["suggestions"] = fuzzy_candidates(code)
    return respond(payload, f"Geen product gevonden voor code {code}.", http_status=status.HTTP_404_NOT_FOUND)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def product_browse(request):
    """
    GET /api/products/browse/?location=<id>&category=<code>&bookable=1
    Stocked products at a location; `bookable` only offers quantity > 0.
    """
    location_id = request.query_params.get("location")
    if not location_id:
        return respond({"rows": []}, "Kies eerst een locatie.", http_status=status.HTTP_400_BAD_REQUEST)
    location = get_object_or_404(Location, pk=location_id)
    category = request.query_params.get("category") or None
    bookable = (request.query_params.get("bookable") or "").lower() in ("1", "true", "yes")

    rows = [{
        "product": e.product_id,
        "sku": e.product.sku,
        "name": e.product.name,
        "category": e.product.category,
        "unit": e.product.unit,
        "quantity": float(e.quantity),
    } for e in browse_by_location(location, category=category, bookable_only=bookable)]

    return respond({"location": location.pk, "rows": rows}, f"{len(rows)} producten op {location.name}.")


# ------------------- Actions: book out / receive / move -------------------

@api_view(["POST"])
@permission_classes([IsAuthenticated])
def stock_book_out(request):
    """
    POST /api/stock/book-out/
    Body: { "project": 1?, "note": "..."?, "lines": [{ "product": 1, "location": 2, "quantity": 5 }, ...] }
    Insufficient stock does not block; it comes back as warnings.
    """
    ser = BookOutSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    data = ser.validated_data
    lines = [BookingLine(product=l.get("product"), location=l.get("location"), quantity=l.get("quantity"))
             for l in data["lines"]]

    result = book_out(lines, request.user, project=data.get("project"), note=data.get("note"))

    msg = f"{len(result.transaction_ids)} regel(s) afgeboekt."
    if result.warnings:
        msg += f" Let op: onvoldoende voorraad voor {len(result.warnings)} regel(s)."
    return respond({"status": "ok", **result.as_dict()}, msg, http_status=status.HTTP_201_CREATED)


@api_view(["POST"])
@permission_classes([IsOfficeStaff])
def stock_receive(request):
    """
    POST /api/stock/receive/
    Body: { "product": 1, "location": 2, "quantity": 5, "note": "..."? }
    """
    ser = ReceiveSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    d = ser.validated_data
    tx, entry = receive_stock(d["product"], d["location"], d["quantity"], request.user, note=d.get("note"))
    return respond(
        {"status": "ok", "transaction_id": tx.pk, "quantity": float(entry.quantity)},
        f"Ontvangst geboekt: {format_quantity(tx.quantity)} {d['product'].unit} "
        f"{d['product'].name} op {d['location'].name}.",
        http_status=status.HTTP_201_CREATED,
    )


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def stock_move(request):
    """
    POST /api/stock/move/
    Body: { "product": 1, "from_location": 2, "to_location": 3, "quantity": 10 }
    """
    ser = MoveSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    d = ser.validated_data
    source_qty, target = move_stock(d["product"], d["from_location"], d["to_location"], d["quantity"])
    return respond(
        {"status": "ok", "from_quantity": float(source_qty), "to_quantity": float(target.quantity)},
        f"Verplaatst: {d['product'].name} van {d['from_location'].name} naar {d['to_location'].name}.",
    )


@api_view(["POST"])
@permission_classes([IsOfficeStaff])
def stock_relocate(request):
    """
    POST /api/stock/relocate/
    Body: { "stock": [<stock entry id>, ...], "to_location": 3 }
    """
    ser = RelocateSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    d = ser.validated_data
    pairs = [(e.product, e.location) for e in d["stock"]]
    moved = relocate_stock(pairs, d["to_location"])
    return respond({"status": "ok", "moved": moved}, f"{moved} voorraadregel(s) verplaatst naar {d['to_location'].name}.")


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def stock_low(request):
    """
    GET /api/stock/low/
    Stock rows below the product's minimum stock.
    """
    rows = LowStockSerializer(low_stock_alerts(), many=True).data
    return respond({"rows": rows}, f"{len(rows)} producten onder minimumvoorraad.")
