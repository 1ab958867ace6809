from django.db import models
from django.db.models import Count, Sum


class WorkLogEntryQuerySet(models.QuerySet):
    def approved(self):
        return self.filter(review_status="approved")

    def pending(self):
        return self.filter(review_status="pending")

    def for_teacher(self, teacher):
        return self.filter(teacher=teacher)

    def within(self, start, end):
        """Entries whose work date falls in the inclusive range [start, end]"""
        return self.filter(work_date__gte=start, work_date__lte=end)

    def external_substitutes(self):
        return self.filter(status="substitute", substitute_type="external")

    def external_summary(self):
        """Count, external hours and distinct teachers of the current rows"""
        totals = self.aggregate(
            count=Count("id"),
            total_hours=Sum("external_teacher_hours"),
            teacher_count=Count("teacher", distinct=True),
        )
        if totals["total_hours"] is None:
            totals["total_hours"] = 0
        return totals
