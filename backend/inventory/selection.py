"""
Material selection: from typed text, a scanned barcode or a location/category
browse to a concrete product, location and quantity.

A scan is just text that flows through the same path as typing. The decoded
value is an exact key (EAN or SKU), so a scan auto-selects its product without
a manual pick from the suggestion list.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db.models import Q
from rapidfuzz import fuzz, process

from .models import Location, Product, StockEntry
from .utils import to_decimal

log = logging.getLogger(__name__)


@dataclass
class Resolution:
    query: str
    candidates: List[Product] = field(default_factory=list)
    selected: Optional[Product] = None

    @property
    def dropdown_open(self):
        return bool(self.candidates) and self.selected is None


@dataclass(frozen=True)
class ConfirmedLine:
    product: Product
    location: Location
    quantity: Decimal


def _is_exact_key(product: Product, query: str) -> bool:
    return bool(query) and (product.ean == query or product.sku == query)


# ------------------- Text search -------------------

def search_by_text(query: str, limit: Optional[int] = None) -> List[Product]:
    """
    Case-insensitive substring match on name, SKU and EAN, in catalog order.
    Queries shorter than MIN_QUERY_LENGTH give nothing.
    A product whose EAN or SKU equals the query is always among the results.
    """
    q = (query or "").strip()
    if len(q) < settings.BACKOFFICE["MIN_QUERY_LENGTH"]:
        return []
    limit = limit or settings.BACKOFFICE["SEARCH_LIMIT"]

    candidates = list(
        Product.objects
        .filter(Q(name__icontains=q) | Q(sku__icontains=q) | Q(ean__icontains=q))
        .order_by("name", "id")[:limit]
    )
    if not any(_is_exact_key(p, q) for p in candidates):
        exact = Product.objects.filter(Q(ean=q) | Q(sku=q)).order_by("name", "id").first()
        if exact is not None:
            if len(candidates) >= limit:
                candidates = candidates[:limit - 1]
            candidates.append(exact)
    return candidates


def auto_select(query: str, candidates: List[Product]) -> Optional[Product]:
    """An exact EAN/SKU hit wins over substring hits; a single candidate is taken as is."""
    q = (query or "").strip()
    for p in candidates:
        if _is_exact_key(p, q):
            return p
    if len(candidates) == 1:
        return candidates[0]
    return None


def search_product(query: str) -> Resolution:
    candidates = search_by_text(query)
    return Resolution(query=query or "", candidates=candidates, selected=auto_select(query, candidates))


def scan(decoded_text: str) -> Resolution:
    res = search_product(decoded_text)
    if res.selected is None:
        log.info("Scan %r did not resolve to a product (%d candidates)", decoded_text, len(res.candidates))
    return res


def fuzzy_candidates(q: str, limit: Optional[int] = None):
    """
    "Did you mean" suggestions for a query the substring search cannot match,
    e.g. a mistyped article number.
    """
    limit = limit or settings.BACKOFFICE["FUZZY_LIMIT"]
    items = list(Product.objects.values("id", "sku", "name", "ean"))
    by_id = {i["id"]: i for i in items}

    entries = []
    entries += [(str(i["sku"]), i["id"]) for i in items if i["sku"]]
    entries += [(str(i["name"]), i["id"]) for i in items if i["name"]]
    entries += [(str(i["ean"]), i["id"]) for i in items if i["ean"]]

    if not entries or not (q or "").strip():
        return []

    texts = [t for (t, _id) in entries]
    results = process.extract(q, texts, scorer=fuzz.WRatio, limit=limit * 3)

    seen, out = set(), []
    for _choice, score, idx in results:
        product_id = entries[idx][1]
        if product_id in seen:
            continue
        seen.add(product_id)
        info = by_id[product_id]
        out.append({
            "id": product_id,
            "sku": info["sku"],
            "name": info["name"],
            "score": round(float(score) / 100.0, 3),
        })
        if len(out) >= limit:
            break
    return out


# ------------------- Browse -------------------

def browse_by_location(location, category: Optional[str] = None, bookable_only: bool = False):
    """
    Stock rows at a location, optionally narrowed to a material group.

    The general material search offers every stocked product whatever its
    quantity; the booking search (`bookable_only`) only what is actually there.
    """
    qs = (
        StockEntry.objects
        .filter(location=location)
        .select_related("product", "location")
        .order_by("product__name", "product__id")
    )
    if category:
        qs = qs.filter(product__category=category)
    if bookable_only:
        qs = qs.filter(quantity__gt=0)
    return qs


# ------------------- Confirmation -------------------

def confirm_line(product: Optional[Product], location: Optional[Location], quantity) -> ConfirmedLine:
    if product is None:
        raise ValidationError("Selecteer een product")
    if location is None:
        raise ValidationError("Selecteer een locatie")
    qty = to_decimal(quantity)
    if qty is None or qty <= 0:
        raise ValidationError("Aantal moet groter zijn dan 0")
    return ConfirmedLine(product=product, location=location, quantity=qty)


@dataclass
class MaterialPicker:
    """
    State of one material line in a form: what was typed, what is offered,
    what is selected. Kept out of the engines, which only return data.
    """
    query: str = ""
    candidates: List[Product] = field(default_factory=list)
    selected: Optional[Product] = None
    dropdown_open: bool = False

    def type(self, text: str) -> "MaterialPicker":
        res = search_product(text)
        self.query = text or ""
        self.candidates = res.candidates
        self.selected = res.selected
        self.dropdown_open = res.dropdown_open
        return self

    def scan(self, decoded_text: str) -> "MaterialPicker":
        return self.type(decoded_text)

    def choose(self, product: Product) -> "MaterialPicker":
        self.selected = product
        self.query = product.name
        self.dropdown_open = False
        return self

    def confirm(self, location: Optional[Location], quantity) -> ConfirmedLine:
        return confirm_line(self.selected, location, quantity)
