# tutorpay/urls.py
from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
)
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from django.contrib import admin
from django.urls import include, path
from django.utils import timezone
from django.views.generic import RedirectView


@api_view(["GET"])
@permission_classes([AllowAny])
@authentication_classes([])
def health_check(request):
    """Public health check endpoint"""
    return Response(
        {
            "status": "online",
            "version": "1.0",
            "timestamp": timezone.now().isoformat(),
        }
    )


@api_view(["GET"])
@permission_classes([AllowAny])
@authentication_classes([])
def api_root(request):
    """API root endpoint showing available endpoints"""
    return Response(
        {
            "message": "TutorPay API",
            "version": "1.0",
            "endpoints": {
                "admin": request.build_absolute_uri("/admin/"),
                "v1_payroll": request.build_absolute_uri("/api/v1/payroll/"),
            },
        }
    )


urlpatterns = [
    path("", RedirectView.as_view(url="/api/", permanent=False)),
    path("admin/", admin.site.urls),
    path("api/health/", health_check, name="health-check"),
    path("api/", api_root, name="api-root"),
    path("api/v1/payroll/", include("payroll.urls")),
]
