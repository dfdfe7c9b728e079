# prism_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from prism_core.audit.api.views import AuditHistoryView, LockStatusView, UnlockLogView
from prism_core.iam.api.auth import LoginView
from prism_core.lab.api.views import AcceptanceSaveView, AcceptanceUnlockView, ResultsUnlockView, ResultsView
from prism_core.morphology.api.views import MorphologySaveView, MorphologyUnlockView
from prism_core.orders.api.views import AcceptedForLabView, LabOrdersView
from prism_core.visits.api.views import SearchView, VisitViewSet

router = DefaultRouter()
router.register(r"visits", VisitViewSet, basename="visits")

urlpatterns = [
    # Auth
    path("auth/login/", LoginView.as_view(), name="login"),

    path("search/", SearchView.as_view(), name="search"),

    # Morphology
    path("morphology/", MorphologySaveView.as_view(), name="morphology-save"),
    path("morphology/unlock/", MorphologyUnlockView.as_view(), name="morphology-unlock"),

    # Orders
    path("orders/<str:lab>/", LabOrdersView.as_view(), name="lab-orders"),
    path("orders/<str:lab>/accepted/", AcceptedForLabView.as_view(), name="lab-orders-accepted"),

    # Acceptance + results
    path("acceptance/<str:lab>/", AcceptanceSaveView.as_view(), name="acceptance-save"),
    path("acceptance/<str:lab>/unlock/", AcceptanceUnlockView.as_view(), name="acceptance-unlock"),
    path("results/<str:lab>/", ResultsView.as_view(), name="results"),
    path("results/<str:lab>/unlock/", ResultsUnlockView.as_view(), name="results-unlock"),

    # Admin reads
    path("admin/audit/<str:record_number>/", AuditHistoryView.as_view(), name="admin-audit"),
    path("admin/unlocks/", UnlockLogView.as_view(), name="admin-unlocks"),
    path("admin/locks/<str:record_number>/<str:visit_id>/", LockStatusView.as_view(), name="admin-locks"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
