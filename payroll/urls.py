from django.urls import path

from .views import (
    confirm_payroll_run,
    external_substitutes,
    payroll_profiles,
    payroll_run_detail,
    payroll_run_list,
    preview_payroll,
    request_payroll_acknowledgement,
    rerequest_acknowledgement,
    save_payroll_draft,
    update_external_pay_status,
)

urlpatterns = [
    path("preview/", preview_payroll, name="payroll-preview"),
    path("runs/", payroll_run_list, name="payroll-run-list"),
    path("runs/draft/", save_payroll_draft, name="payroll-run-draft"),
    path(
        "runs/request-ack/",
        request_payroll_acknowledgement,
        name="payroll-run-request-ack",
    ),
    path("runs/<int:run_id>/", payroll_run_detail, name="payroll-run-detail"),
    path(
        "runs/<int:run_id>/request-ack/",
        rerequest_acknowledgement,
        name="payroll-run-rerequest-ack",
    ),
    path("runs/<int:run_id>/confirm/", confirm_payroll_run, name="payroll-run-confirm"),
    path("profiles/", payroll_profiles, name="payroll-profiles"),
    path(
        "external-substitutes/",
        external_substitutes,
        name="payroll-external-substitutes",
    ),
    path(
        "external-substitutes/<int:entry_id>/pay-status/",
        update_external_pay_status,
        name="payroll-external-pay-status",
    ),
]
