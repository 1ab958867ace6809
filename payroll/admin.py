from django.contrib import admin

from .models import (
    TeacherPayrollAcknowledgement,
    TeacherPayrollProfile,
    TeacherPayrollRun,
    TeacherPayrollRunItem,
)


@admin.register(TeacherPayrollProfile)
class TeacherPayrollProfileAdmin(admin.ModelAdmin):
    list_display = (
        "teacher",
        "contract_type",
        "hourly_rate",
        "base_salary_amount",
        "insurance_enrolled",
        "effective_from",
        "effective_to",
    )
    list_filter = ("contract_type", "insurance_enrolled")
    search_fields = ("teacher__first_name", "teacher__last_name", "teacher__email")
    raw_id_fields = ("teacher", "created_by")
    readonly_fields = ("created_at", "updated_at")


class TeacherPayrollRunItemInline(admin.TabularInline):
    model = TeacherPayrollRunItem
    extra = 0
    can_delete = False
    fields = ("order_index", "item_kind", "label", "amount")
    readonly_fields = fields


class TeacherPayrollAcknowledgementInline(admin.StackedInline):
    model = TeacherPayrollAcknowledgement
    extra = 0
    can_delete = False
    readonly_fields = ("status", "requested_by", "requested_at", "confirmed_at", "note")


@admin.register(TeacherPayrollRun)
class TeacherPayrollRunAdmin(admin.ModelAdmin):
    list_display = (
        "teacher",
        "period_start",
        "period_end",
        "status",
        "gross_pay",
        "deductions_total",
        "net_pay",
    )
    list_filter = ("status", "contract_type", "period_start")
    search_fields = ("teacher__first_name", "teacher__last_name")
    date_hierarchy = "period_start"
    inlines = [TeacherPayrollRunItemInline, TeacherPayrollAcknowledgementInline]
    readonly_fields = (
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
        "meta",
        "requested_by",
        "requested_at",
        "created_by",
        "created_at",
        "updated_at",
    )
