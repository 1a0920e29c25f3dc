# backoffice/urls.py
from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView, TokenVerifyView
from rest_framework.routers import DefaultRouter

from accounts.views import MeView, LogoutView
from inventory.views import (
    ProductViewSet, MaterialGroupViewSet, LocationViewSet,
    StockEntryViewSet, InventoryTransactionViewSet,
    health, product_search, product_scan, product_browse,
    stock_book_out, stock_receive, stock_move, stock_relocate, stock_low,
)
from notifications.views import NotificationViewSet
from projects.views import (
    ProjectViewSet, WorkCodeViewSet, ProjectWorkCodeViewSet,
    available_codes, toggle_code, add_custom,
)
from timesheets.views import TimeRegistrationViewSet


router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"material-groups", MaterialGroupViewSet)
router.register(r"locations", LocationViewSet)
router.register(r"stock", StockEntryViewSet, basename="stock")
router.register(r"transactions", InventoryTransactionViewSet, basename="transaction")
router.register(r"projects", ProjectViewSet, basename="project")
router.register(r"work-codes", WorkCodeViewSet)
router.register(r"project-work-codes", ProjectWorkCodeViewSet, basename="project-work-code")
router.register(r"time-registrations", TimeRegistrationViewSet, basename="time-registration")
router.register(r"notifications", NotificationViewSet, basename="notification")

urlpatterns = [
    path("admin/", admin.site.urls),

    # Auth
    path("api/auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("api/auth/token/verify/", TokenVerifyView.as_view(), name="token_verify"),
    path("api/auth/me/", MeView.as_view(), name="me"),
    path("api/auth/logout/", LogoutView.as_view(), name="logout"),

    # Function endpoints, before the router so "search" etc. are not taken as ids
    path("api/health/", health, name="health"),
    path("api/products/search/", product_search, name="product-search"),
    path("api/products/scan/", product_scan, name="product-scan"),
    path("api/products/browse/", product_browse, name="product-browse"),
    path("api/stock/book-out/", stock_book_out, name="stock-book-out"),
    path("api/stock/receive/", stock_receive, name="stock-receive"),
    path("api/stock/move/", stock_move, name="stock-move"),
    path("api/stock/relocate/", stock_relocate, name="stock-relocate"),
    path("api/stock/low/", stock_low, name="stock-low"),
    path("api/projects/<int:project_id>/work-codes/", available_codes, name="project-work-codes"),
    path("api/projects/<int:project_id>/work-codes/toggle/", toggle_code, name="project-work-codes-toggle"),
    path("api/projects/<int:project_id>/work-codes/custom/", add_custom, name="project-work-codes-custom"),

    # DRF Router (CRUD)
    path("api/", include(router.urls)),
]
