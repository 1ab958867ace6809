"""
Pay profile management endpoints.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.logging_utils import safe_log_employee
from core.pagination import StandardResultsSetPagination
from users.permissions import IsPayrollAdmin, get_user_employee_profile

from ..models import TeacherPayrollProfile
from ..serializers import TeacherPayrollProfileSerializer

logger = logging.getLogger(__name__)


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsPayrollAdmin])
def payroll_profiles(request):
    """
    List pay profiles (optionally for one teacher) or create a new one
    """
    if request.method == "POST":
        serializer = TeacherPayrollProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = serializer.save(created_by=get_user_employee_profile(request.user))
        logger.info(
            "Payroll profile created",
            extra={
                **safe_log_employee(profile.teacher, "payroll_profile_created"),
                "profile_id": profile.pk,
            },
        )
        return Response(
            TeacherPayrollProfileSerializer(profile).data,
            status=status.HTTP_201_CREATED,
        )

    queryset = TeacherPayrollProfile.objects.select_related("teacher")
    teacher_id = request.query_params.get("teacher_id")
    if teacher_id:
        queryset = queryset.filter(teacher_id=teacher_id)

    paginator = StandardResultsSetPagination()
    page = paginator.paginate_queryset(queryset, request)
    serializer = TeacherPayrollProfileSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)
