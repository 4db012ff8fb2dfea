"""
REST paths of the studio backend, relative to the configured base URL.

Keep all path literals here so resource modules never hand-build prefixes.
Templates use `{name}` placeholders filled by `path()`.
"""
from __future__ import annotations

from urllib.parse import quote

# Admin
AUTH_LOGIN = "/auth/login"
STUDENTS = "/students"
STUDENTS_BULK_UPDATE = "/students/bulk-update"
PARENTS = "/parents"
INSTRUCTORS = "/instructors"
PROSPECTS = "/prospects"
APPROVE_PROSPECT = "/prospects/{prospect_id}/approve"
CLASS_OFFERINGS = "/class-offerings"
ABSENCES = "/absences"
SCHOOL_EVENTS = "/school-events"
ROLES = "/roles"
ADMIN_USERS = "/admin-users"
ADMIN_USERS_BULK_STATUS = "/admin-users/bulk-update-status"
ADMIN_USERS_BULK_ROLE = "/admin-users/bulk-update-role"
PROGRAMS = "/programs"
MEMBERSHIP_PLANS = "/membership-plans"
ENROLLMENTS = "/enrollments"
UNENROLL = "/enrollments/student/{student_id}/class/{class_offering_id}"
ATTENDANCE = "/attendance"
ATTENDANCE_BULK = "/attendance/bulk"
ANNOUNCEMENTS = "/announcements"

# Dashboard
DASHBOARD_METRICS = "/dashboard/metrics"
DASHBOARD_ALERTS = "/dashboard/alerts"
DASHBOARD_TODOS = "/dashboard/todos"
DASHBOARD_AGED_ACCOUNTS = "/dashboard/aged-accounts"
DASHBOARD_REVENUE = "/dashboard/revenue"

# Settings
GENERAL_SETTINGS = "/settings/general"
CALENDAR_SETTINGS = "/settings/calendar"
SETTINGS_STRIPE = "/settings/stripe"

# Billing (payment processor proxied through the backend)
PAYMENTS = "/stripe/payments"
INVOICES = "/stripe/invoices"
INVOICE_PDF = "/stripe/invoices/{invoice_id}/pdf"
EMAIL_INVOICE = "/stripe/invoices/{invoice_id}/email"
STRIPE_SUBSCRIPTIONS = "/stripe/subscriptions"
STRIPE_SUBSCRIPTION_CHANGE_PLAN = "/stripe/subscriptions/{subscription_id}/change-plan"
STRIPE_SUBSCRIPTION_CANCEL = "/stripe/subscriptions/{subscription_id}/cancel"
STUDENT_STRIPE_SUBSCRIPTION = "/stripe/students/{student_id}/stripe-subscription"
STUDENT_UPDATE_PAYMENT_METHOD = "/stripe/students/{student_id}/update-payment-method"
STRIPE_METRICS = "/stripe/metrics"
STRIPE_CREATE_AUDITION_PAYMENT = "/stripe/create-audition-payment"
STRIPE_CONNECT_ACCOUNT_STATUS = "/studios/{studio_id}/stripe-status"
STRIPE_CONNECT_ACCOUNT_LINK = "/stripe/connect/account-link"

# Client portal
CLIENT_LOGIN = "/portal/auth/login"
CLIENT_PROFILE_ME = "/portal/me"

# Public
PUBLIC_REGISTER_STUDIO = "/public/register-studio"


def path(template: str, **ids: str) -> str:
    """Fill `{name}` placeholders with URL-quoted identifiers."""
    return template.format(**{k: quote(str(v), safe="") for k, v in ids.items()})


def item(collection: str, item_id: str) -> str:
    return f"{collection}/{quote(str(item_id), safe='')}"
