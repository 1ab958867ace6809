"""
External substitute ledger endpoints.
"""

import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from django.shortcuts import get_object_or_404

from users.permissions import IsPayrollAdmin
from worktime.models import WorkLogEntry

from ..serializers import (
    ExternalSubstituteSerializer,
    PayStatusSerializer,
    validate_month_token,
)

logger = logging.getLogger(__name__)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsPayrollAdmin])
def external_substitutes(request):
    """
    Approved external substitute days of a month with a summary
    """
    month = request.query_params.get("month")
    if not month:
        raise ValidationError({"month": "This query parameter is required (YYYY-MM)"})
    period_start, period_end = validate_month_token(month)

    queryset = (
        WorkLogEntry.objects.approved()
        .external_substitutes()
        .within(period_start, period_end)
        .select_related("teacher")
        .order_by("work_date", "pk")
    )
    summary = queryset.external_summary()

    return Response(
        {
            "month": month,
            "summary": {
                "count": summary["count"],
                "total_hours": str(summary["total_hours"]),
                "teacher_count": summary["teacher_count"],
            },
            "results": ExternalSubstituteSerializer(queryset, many=True).data,
        }
    )


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsPayrollAdmin])
def update_external_pay_status(request, entry_id):
    """
    Mark an external substitute as paid or pending
    """
    entry = get_object_or_404(
        WorkLogEntry.objects.approved().external_substitutes(), pk=entry_id
    )
    serializer = PayStatusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    entry.external_teacher_pay_status = serializer.validated_data["pay_status"]
    entry.save()
    logger.info(
        "External substitute pay status updated",
        extra={
            "entry_id": entry.pk,
            "pay_status": entry.external_teacher_pay_status,
            "action": "external_pay_status_updated",
        },
    )
    return Response(ExternalSubstituteSerializer(entry).data)
