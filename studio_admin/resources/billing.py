"""
Payments, invoices and payment-processor subscriptions.

All processor operations are proxied through the studio backend; this module
never talks to the processor directly. Card collection and payment
confirmation happen in the processor's own client library, which hands us
opaque ids (payment method, price, subscription).
"""
from __future__ import annotations

from typing import List, Optional

from studio_admin.gateway.errors import ApiRequestError, is_subscription_not_found
from studio_admin.gateway.request import NO_CONTENT, RequestGateway

from . import endpoints as ep
from .types import (
    AuditionContact,
    ConnectAccountStatus,
    FinancialMetrics,
    Invoice,
    Payment,
    PaymentInput,
    Subscription,
)


async def record_payment(
    gw: RequestGateway, student_id: str, membership_plan_id: str, payment: PaymentInput
) -> Payment:
    """Record a manual payment; the backend may issue an invoice for it."""
    body = {"studentId": student_id, "membershipPlanId": membership_plan_id, **payment.to_payload()}
    return await gw.request(ep.PAYMENTS, method="POST", body=body)


async def list_payments_by_student(gw: RequestGateway, student_id: str) -> List[Payment]:
    return await gw.request(ep.PAYMENTS, params={"studentId": student_id})


async def list_invoices_by_student(gw: RequestGateway, student_id: str) -> List[Invoice]:
    return await gw.request(ep.INVOICES, params={"studentId": student_id})


async def email_invoice(gw: RequestGateway, invoice_id: str) -> None:
    await gw.request(ep.path(ep.EMAIL_INVOICE, invoice_id=invoice_id), method="POST")


# --- Subscriptions ----------------------------------------------------------------


async def create_subscription(
    gw: RequestGateway,
    student_id: str,
    price_id: str,
    payment_method_id: str,
    existing_customer_id: Optional[str] = None,
) -> Subscription:
    body = {
        "studentId": student_id,
        "priceId": price_id,
        "paymentMethodId": payment_method_id,
        "existingStripeCustomerId": existing_customer_id,
    }
    return await gw.request(ep.STRIPE_SUBSCRIPTIONS, method="POST", body=body)


async def change_subscription_plan(gw: RequestGateway, subscription_id: str, new_price_id: str) -> Subscription:
    url = ep.path(ep.STRIPE_SUBSCRIPTION_CHANGE_PLAN, subscription_id=subscription_id)
    return await gw.request(url, method="PATCH", body={"newPriceId": new_price_id})


async def update_payment_method(gw: RequestGateway, student_id: str, payment_method_id: str) -> None:
    url = ep.path(ep.STUDENT_UPDATE_PAYMENT_METHOD, student_id=student_id)
    await gw.request(url, method="POST", body={"paymentMethodId": payment_method_id})


async def cancel_subscription(gw: RequestGateway, student_id: str, subscription_id: str) -> Optional[Subscription]:
    """Cancel a subscription; the student id is sent for server-side ownership checks."""
    url = ep.path(ep.STRIPE_SUBSCRIPTION_CANCEL, subscription_id=subscription_id)
    result = await gw.request(url, method="DELETE", body={"studentId": student_id})
    if result is NO_CONTENT:
        return None
    return result


async def get_student_subscription(gw: RequestGateway, student_id: str) -> Optional[Subscription]:
    """Return the student's active subscription, or None when there is none.

    The backend reports "no subscription" as an error; that one message is
    treated as an empty result and every other failure is re-raised.
    """
    url = ep.path(ep.STUDENT_STRIPE_SUBSCRIPTION, student_id=student_id)
    try:
        result = await gw.request(url)
    except ApiRequestError as exc:
        if is_subscription_not_found(exc):
            return None
        raise
    if result is NO_CONTENT or not result:
        return None
    return result


async def get_financial_metrics(gw: RequestGateway) -> FinancialMetrics:
    return await gw.request(ep.STRIPE_METRICS)


async def create_audition_payment_intent(gw: RequestGateway, contact: AuditionContact) -> str:
    """Create the audition-fee payment intent and return its client secret."""
    body = await gw.request(ep.STRIPE_CREATE_AUDITION_PAYMENT, method="POST", body=contact.to_payload())
    return body["clientSecret"]


# --- Connected account ------------------------------------------------------------


async def get_connect_account_status(gw: RequestGateway, studio_id: str) -> ConnectAccountStatus:
    return await gw.request(ep.path(ep.STRIPE_CONNECT_ACCOUNT_STATUS, studio_id=studio_id))


async def create_connect_account_link(gw: RequestGateway) -> str:
    """Return the onboarding URL for the studio's connected payout account."""
    body = await gw.request(ep.STRIPE_CONNECT_ACCOUNT_LINK, method="POST")
    return body["url"]
