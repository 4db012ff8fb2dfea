"""
Wire types for the studio REST backend.

Response shapes are TypedDicts: they document what the backend returns and
give static type checkers something to hold on to, but nothing here validates
payloads at runtime. Request bodies with a fixed shape are frozen dataclasses
whose `to_payload()` is the one place that maps Python field names to the
camelCase wire format.

Entity form data (students, parents, admin users) is a partial mapping; pass
it through `form_payload()` which strips client-only fields before sending.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, TypedDict

StudentStatus = Literal["Active", "Inactive", "Suspended"]
AdminUserStatus = Literal["active", "inactive", "suspended"]
AbsenceStatus = Literal["Notified", "Justified", "Unjustified"]
AttendanceStatus = Literal["Present", "Absent", "Late", "Excused"]
EnrollmentStatus = Literal["Enrolled", "Waitlisted", "Dropped"]
PaymentMethod = Literal["Cash", "Credit Card", "Bank Transfer", "Stripe Subscription", "Other"]
ProspectStatus = Literal["PENDING_EVALUATION", "CONVERTED", "REJECTED"]

# Fields that only exist in client-side forms and must never reach the backend
_FORM_ONLY_FIELDS = frozenset({"confirmPassword"})


def form_payload(form: Mapping[str, Any]) -> Dict[str, Any]:
    """Map entity form state to a wire payload.

    - drops client-only fields (password confirmation)
    - drops an empty password so updates do not reset credentials
    - keeps explicit None values (nullable wire fields such as program)
    """
    payload = {k: v for k, v in form.items() if k not in _FORM_ONLY_FIELDS}
    if not payload.get("password"):
        payload.pop("password", None)
    return payload


# --- Entities (responses) -----------------------------------------------------


class Address(TypedDict, total=False):
    street: str
    city: str
    state: str
    zipCode: str


class Student(TypedDict, total=False):
    id: str
    firstName: str
    lastName: str
    dateOfBirth: str
    email: str
    phone: str
    address: Address
    program: Optional[str]
    dancerLevel: Optional[str]
    enrolledClasses: List[str]
    membershipPlanId: Optional[str]
    membershipPlanName: str
    membershipStartDate: Optional[str]
    membershipRenewalDate: Optional[str]
    status: StudentStatus
    stripeCustomerId: str
    stripeSubscriptionId: str
    parentId: Optional[str]


class Parent(TypedDict, total=False):
    id: str
    firstName: str
    lastName: str
    email: str
    phone: str
    address: Address
    username: str


class Instructor(TypedDict, total=False):
    id: str
    firstName: str
    lastName: str
    email: str
    phone: str
    bio: str
    specializations: List[str]
    availability: List[Dict[str, Any]]


class Role(TypedDict, total=False):
    id: str
    name: str
    description: str
    permissions: List[str]


class AdminUser(TypedDict, total=False):
    id: str
    username: str
    email: str
    firstName: str
    lastName: str
    roleId: str
    roleName: str
    status: AdminUserStatus
    studioId: str
    stripeAccountId: str


class Program(TypedDict, total=False):
    id: str
    name: str
    ageRange: str
    hasLevels: bool
    levels: List[str]


class MembershipPlan(TypedDict, total=False):
    id: str
    name: str
    classesPerWeek: int
    monthlyPrice: float
    stripePriceId: str


class ClassOffering(TypedDict, total=False):
    id: str
    category: str
    name: str
    level: str
    instructorName: str
    scheduledClassSlots: List[Dict[str, Any]]
    capacity: int
    enrolledCount: int


class Enrollment(TypedDict, total=False):
    id: str
    studentId: str
    classOfferingId: str
    enrollmentDate: str
    status: EnrollmentStatus
    waitlistPosition: Optional[int]


class Absence(TypedDict, total=False):
    id: str
    studentId: str
    studentName: str
    classId: str
    className: str
    classDateTime: str
    reason: str
    notes: str
    notificationDate: str
    status: AbsenceStatus


class AttendanceRecord(TypedDict, total=False):
    id: str
    studentId: str
    studentName: str
    classOfferingId: str
    classDateTime: str
    status: AttendanceStatus
    notes: str
    absenceId: str


class SchoolEvent(TypedDict, total=False):
    id: str
    date: str
    name: str
    description: str
    isHoliday: bool


class Announcement(TypedDict, total=False):
    id: str
    title: str
    content: str
    category: Literal["Events", "Schedules", "General", "Urgent"]
    isImportant: bool
    date: str


class GeneralSettings(TypedDict, total=False):
    id: str
    academyName: str
    contactPhone: str
    contactEmail: str
    address: Address
    logoUrl: str
    businessHours: List[Dict[str, Any]]


class CalendarSettings(TypedDict, total=False):
    id: str
    defaultClassDuration: int
    studioTimezone: str
    weekStartDay: int
    terms: List[Dict[str, Any]]
    rooms: List[Dict[str, Any]]


class StripeProductSettings(TypedDict, total=False):
    enrollmentProductId: str
    enrollmentPriceId: str
    auditionProductId: str
    auditionPriceId: str
    publicKey: str


class Payment(TypedDict, total=False):
    id: str
    studentId: str
    membershipPlanId: str
    amountPaid: float
    paymentDate: str
    paymentMethod: PaymentMethod
    transactionId: str
    notes: str
    invoiceId: str


class Invoice(TypedDict, total=False):
    id: str
    studentId: str
    invoiceNumber: str
    issueDate: str
    dueDate: str
    items: List[Dict[str, Any]]
    totalAmount: float
    amountPaid: float
    amountDue: float
    status: Literal["Draft", "Sent", "Paid", "Overdue", "Void"]


class Subscription(TypedDict, total=False):
    id: str
    status: str
    stripeCustomerId: str
    items: Dict[str, Any]
    current_period_end: int
    clientSecret: Optional[str]
    cancel_at_period_end: bool


class FinancialMetrics(TypedDict, total=False):
    mrr: float
    activeSubscribers: int
    arpu: float
    churnRate: float
    ltv: float
    planMix: List[Dict[str, Any]]
    paymentFailureRate: float


class ConnectAccountStatus(TypedDict, total=False):
    status: Literal["unverified", "incomplete", "active"]
    details_submitted: bool
    payouts_enabled: bool
    url: str


class Prospect(TypedDict, total=False):
    id: str
    firstName: str
    lastName: str
    email: str
    phone: str
    dateOfBirth: str
    status: ProspectStatus
    auditionPaymentId: str


class LoginResponse(TypedDict, total=False):
    access_token: str
    user: AdminUser
    permissions: List[str]


class ClientProfile(TypedDict, total=False):
    user: Dict[str, Any]
    students: List[Student]


class ClientLoginResponse(TypedDict, total=False):
    access_token: str
    profile: ClientProfile


class UpdatedCount(TypedDict):
    updatedCount: int


# --- Request bodies -------------------------------------------------------------


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def to_payload(self) -> Dict[str, Any]:
        return {"username": self.username, "password": self.password}


@dataclass(frozen=True)
class StudioRegistration:
    director_name: str
    email: str
    password: str
    studio_name: str
    plan_id: str
    billing_cycle: Literal["monthly", "annual"]
    payment_method_id: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "directorName": self.director_name,
            "email": self.email,
            "password": self.password,
            "studioName": self.studio_name,
            "planId": self.plan_id,
            "billingCycle": self.billing_cycle,
            "paymentMethodId": self.payment_method_id,
        }


@dataclass(frozen=True)
class AbsenceInput:
    student_id: str
    student_name: str
    class_id: str
    class_name: str
    class_date_time: str
    reason: str
    notes: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "studentId": self.student_id,
            "studentName": self.student_name,
            "classId": self.class_id,
            "className": self.class_name,
            "classDateTime": self.class_date_time,
            "reason": self.reason,
        }
        if self.notes is not None:
            payload["notes"] = self.notes
        return payload


@dataclass(frozen=True)
class AttendanceMark:
    student_id: str
    class_offering_id: str
    class_date_time: str
    status: AttendanceStatus
    notes: Optional[str] = None
    absence_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "studentId": self.student_id,
            "classOfferingId": self.class_offering_id,
            "classDateTime": self.class_date_time,
            "status": self.status,
        }
        if self.notes is not None:
            payload["notes"] = self.notes
        if self.absence_id is not None:
            payload["absenceId"] = self.absence_id
        return payload


@dataclass(frozen=True)
class PaymentInput:
    amount_paid: float
    payment_date: str  # YYYY-MM-DD
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None
    notes: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "amountPaid": self.amount_paid,
            "paymentDate": self.payment_date,
            "paymentMethod": self.payment_method,
        }
        if self.transaction_id is not None:
            payload["transactionId"] = self.transaction_id
        if self.notes is not None:
            payload["notes"] = self.notes
        return payload


@dataclass(frozen=True)
class StudentBulkUpdate:
    """Subset of student fields that may be changed for many students at once."""

    membership_plan_id: Optional[str] = None
    status: Optional[StudentStatus] = None
    program: Optional[str] = None
    dancer_level: Optional[str] = None
    membership_start_date: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        fields = {
            "membershipPlanId": self.membership_plan_id,
            "status": self.status,
            "program": self.program,
            "dancerLevel": self.dancer_level,
            "membershipStartDate": self.membership_start_date,
        }
        return {k: v for k, v in fields.items() if v is not None}


@dataclass(frozen=True)
class ProspectApproval:
    program: Optional[str]
    dancer_level: Optional[str]

    def to_payload(self) -> Dict[str, Any]:
        return {"program": self.program, "dancerLevel": self.dancer_level}


@dataclass(frozen=True)
class AuditionContact:
    first_name: str
    last_name: str
    email: str

    def to_payload(self) -> Dict[str, Any]:
        return {"name": f"{self.first_name} {self.last_name}", "email": self.email}


@dataclass(frozen=True)
class StudentRef:
    """Minimal student view needed to assemble an attendance history."""

    id: str
    enrolled_classes: List[str] = field(default_factory=list)

    @classmethod
    def from_student(cls, student: Mapping[str, Any]) -> "StudentRef":
        return cls(id=str(student.get("id") or ""), enrolled_classes=list(student.get("enrolledClasses") or []))
