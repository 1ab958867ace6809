"""
Settlement endpoints: preview, draft, acknowledgement request, confirmation
and run listing.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.logging_utils import public_emp_id
from core.pagination import StandardResultsSetPagination
from users.permissions import IsPayrollAdmin, IsStaffMember, get_user_employee_profile

from ..models import TeacherPayrollRun
from ..serializers import (
    ConfirmSerializer,
    PayrollRequestSerializer,
    TeacherPayrollRunDetailSerializer,
    TeacherPayrollRunSerializer,
    validate_month_token,
)
from ..services.lifecycle import SettlementLifecycle
from ..services.payroll_service import get_payroll_service
from .helpers import get_run_for_user

logger = logging.getLogger(__name__)


def _service_kwargs(data):
    return {
        "adjustments": data["adjustments"],
        "incentives": data["incentives"],
        "message_append": data["message_append"],
    }


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsPayrollAdmin])
def preview_payroll(request):
    """
    Compute a teacher's breakdown and statement without saving anything
    """
    serializer = PayrollRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    computation = get_payroll_service().compute(
        data["teacher"], data["period_start"], data["period_end"], **_service_kwargs(data)
    )
    return Response(computation.to_dict())


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsPayrollAdmin])
def save_payroll_draft(request):
    """
    Compute and store the draft run for a teacher and month
    """
    serializer = PayrollRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    actor = get_user_employee_profile(request.user)

    run, computation = get_payroll_service().save_draft(
        data["teacher"],
        data["period_start"],
        data["period_end"],
        actor=actor,
        request_note=data["request_note"],
        **_service_kwargs(data),
    )
    logger.info(
        "Payroll draft saved",
        extra={
            "employee_hash": public_emp_id(run.teacher_id),
            "actor_hash": public_emp_id(actor.pk),
            "run_id": run.pk,
            "action": "payroll_draft_saved",
        },
    )
    return Response(
        {
            "run": TeacherPayrollRunDetailSerializer(run).data,
            "breakdown": computation.breakdown.to_dict(),
        }
    )


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsPayrollAdmin])
def request_payroll_acknowledgement(request):
    """
    Compute, store and send a run to the teacher for confirmation
    """
    serializer = PayrollRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    actor = get_user_employee_profile(request.user)

    run, computation = get_payroll_service().submit_for_acknowledgement(
        data["teacher"],
        data["period_start"],
        data["period_end"],
        actor=actor,
        request_note=data["request_note"],
        **_service_kwargs(data),
    )
    return Response(
        {
            "run": TeacherPayrollRunDetailSerializer(run).data,
            "breakdown": computation.breakdown.to_dict(),
        }
    )


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsPayrollAdmin])
def rerequest_acknowledgement(request, run_id):
    """
    Send an existing run for confirmation again without recomputing it
    """
    actor, run = get_run_for_user(request.user, run_id)
    run = SettlementLifecycle().request_acknowledgement(
        run, actor=actor, note=request.data.get("note", "")
    )
    return Response(TeacherPayrollRunDetailSerializer(run).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsStaffMember])
def payroll_run_list(request):
    """
    List runs; payroll admins see every teacher, teachers see their own
    """
    employee = get_user_employee_profile(request.user)
    queryset = TeacherPayrollRun.objects.select_related("teacher")

    if not employee.is_payroll_admin:
        queryset = queryset.filter(teacher=employee)

    month = request.query_params.get("month")
    if month:
        period_start, period_end = validate_month_token(month)
        queryset = queryset.filter(
            period_start__gte=period_start, period_end__lte=period_end
        )

    run_status = request.query_params.get("status")
    if run_status:
        queryset = queryset.filter(status=run_status)

    paginator = StandardResultsSetPagination()
    page = paginator.paginate_queryset(queryset, request)
    serializer = TeacherPayrollRunSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsStaffMember])
def payroll_run_detail(request, run_id):
    """
    A run with its items and acknowledgement
    """
    _, run = get_run_for_user(request.user, run_id)
    return Response(TeacherPayrollRunDetailSerializer(run).data)


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsStaffMember])
def confirm_payroll_run(request, run_id):
    """
    The owning teacher confirms a run awaiting acknowledgement
    """
    employee, run = get_run_for_user(request.user, run_id)
    serializer = ConfirmSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    run = SettlementLifecycle().confirm(
        run, actor=employee, note=serializer.validated_data["note"]
    )
    return Response(TeacherPayrollRunDetailSerializer(run).data, status=status.HTTP_200_OK)
