from rest_framework import serializers

from django.core.exceptions import ValidationError as DjangoValidationError

from users.models import Employee
from worktime.models import WorkLogEntry

from .models import (
    TeacherPayrollAcknowledgement,
    TeacherPayrollProfile,
    TeacherPayrollRun,
    TeacherPayrollRunItem,
)
from .services.payroll_utils import period_label, resolve_month_range


def validate_month_token(value):
    """Parse a YYYY-MM token into an inclusive (start, end) range"""
    try:
        return resolve_month_range(value)
    except DjangoValidationError as e:
        raise serializers.ValidationError(e.message_dict.get("month", e.messages))


class AdjustmentSerializer(serializers.Serializer):
    label = serializers.CharField(max_length=200)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    is_deduction = serializers.BooleanField(default=False)


class IncentiveSerializer(serializers.Serializer):
    """Blank or non-positive incentives are accepted and dropped later"""

    label = serializers.CharField(max_length=200, allow_blank=True, default="")
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class PayrollRequestSerializer(serializers.Serializer):
    """Input for preview, draft and acknowledgement requests"""

    teacher_id = serializers.IntegerField()
    month = serializers.CharField()
    adjustments = AdjustmentSerializer(many=True, required=False, default=list)
    incentives = IncentiveSerializer(many=True, required=False, default=list)
    message_append = serializers.CharField(required=False, allow_blank=True, default="")
    request_note = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_teacher_id(self, value):
        teacher = Employee.objects.active().filter(pk=value).first()
        if teacher is None:
            raise serializers.ValidationError("Teacher not found")
        return value

    def validate(self, attrs):
        attrs["teacher"] = Employee.objects.get(pk=attrs["teacher_id"])
        attrs["period_start"], attrs["period_end"] = validate_month_token(attrs["month"])
        return attrs


class TeacherPayrollProfileSerializer(serializers.ModelSerializer):
    teacher_name = serializers.ReadOnlyField(source="teacher.get_full_name")

    class Meta:
        model = TeacherPayrollProfile
        fields = [
            "id",
            "teacher",
            "teacher_name",
            "hourly_rate",
            "hourly_currency",
            "base_salary_amount",
            "base_salary_currency",
            "contract_type",
            "insurance_enrolled",
            "effective_from",
            "effective_to",
            "notes",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_by", "created_at", "updated_at"]

    def validate(self, attrs):
        effective_from = attrs.get("effective_from")
        effective_to = attrs.get("effective_to")
        if effective_from and effective_to and effective_to < effective_from:
            raise serializers.ValidationError(
                {"effective_to": "Effective end must not be before effective start."}
            )
        if attrs.get("contract_type", "employee") != "employee":
            attrs["insurance_enrolled"] = False
        return attrs


class TeacherPayrollRunItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = TeacherPayrollRunItem
        fields = ["id", "item_kind", "label", "amount", "metadata", "order_index"]


class TeacherPayrollAcknowledgementSerializer(serializers.ModelSerializer):
    class Meta:
        model = TeacherPayrollAcknowledgement
        fields = [
            "status",
            "requested_by",
            "requested_at",
            "confirmed_at",
            "note",
        ]


class TeacherPayrollRunSerializer(serializers.ModelSerializer):
    """Run totals for list views"""

    teacher_name = serializers.ReadOnlyField(source="teacher.get_full_name")
    period_label = serializers.SerializerMethodField()

    class Meta:
        model = TeacherPayrollRun
        fields = [
            "id",
            "teacher",
            "teacher_name",
            "period_start",
            "period_end",
            "period_label",
            "contract_type",
            "insurance_enrolled",
            "total_work_hours",
            "hourly_total",
            "weekly_allowance",
            "base_salary_total",
            "adjustment_total",
            "gross_pay",
            "deductions_total",
            "net_pay",
            "status",
            "requested_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_period_label(self, obj):
        return period_label(obj.period_start, obj.period_end)


class TeacherPayrollRunDetailSerializer(TeacherPayrollRunSerializer):
    """Run with its line items, acknowledgement and statement"""

    items = TeacherPayrollRunItemSerializer(many=True, read_only=True)
    acknowledgement = serializers.SerializerMethodField()

    class Meta(TeacherPayrollRunSerializer.Meta):
        fields = TeacherPayrollRunSerializer.Meta.fields + [
            "message_preview",
            "meta",
            "items",
            "acknowledgement",
        ]
        read_only_fields = fields

    def get_acknowledgement(self, obj):
        try:
            ack = obj.acknowledgement
        except TeacherPayrollAcknowledgement.DoesNotExist:
            return None
        return TeacherPayrollAcknowledgementSerializer(ack).data


class ConfirmSerializer(serializers.Serializer):
    note = serializers.CharField(required=False, allow_blank=True, default="")


class ExternalSubstituteSerializer(serializers.ModelSerializer):
    teacher_name = serializers.ReadOnlyField(source="teacher.get_full_name")

    class Meta:
        model = WorkLogEntry
        fields = [
            "id",
            "teacher",
            "teacher_name",
            "work_date",
            "external_teacher_name",
            "external_teacher_phone",
            "external_teacher_bank",
            "external_teacher_account",
            "external_teacher_hours",
            "external_teacher_pay_status",
            "notes",
        ]
        read_only_fields = fields


class PayStatusSerializer(serializers.Serializer):
    pay_status = serializers.ChoiceField(choices=WorkLogEntry.PAY_STATUS_CHOICES)
