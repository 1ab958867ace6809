from django.contrib import admin

from .models import WorkLogEntry


@admin.register(WorkLogEntry)
class WorkLogEntryAdmin(admin.ModelAdmin):
    list_display = (
        "teacher",
        "work_date",
        "status",
        "work_hours",
        "review_status",
    )
    list_filter = ("status", "review_status", "substitute_type")
    search_fields = (
        "teacher__first_name",
        "teacher__last_name",
        "external_teacher_name",
    )
    date_hierarchy = "work_date"
    raw_id_fields = ("teacher", "substitute_teacher", "reviewed_by")
    readonly_fields = ("created_at", "updated_at")
