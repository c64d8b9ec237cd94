"""Mini README: Valuation and completion rules for individual courses.

Structure:
    * calculate_delivered_value - money earned for a course's completed work.
    * is_course_completed - authoritative "done for the day" predicate.
    * calculate_articles_received_value - value of goods handed to the courier.
    * calculate_unreturned_value - failed deliveries the courier still holds.
    * calculate_validated_shipment_fees - shipment costs approved for refund.

A shipment is valued at the configured flat ``shipment_fee`` once the payout
policy is satisfied. The fee recorded on the shipment itself is what the
courier paid the carrier; it is refunded through the daily expenses once an
admin validates the shipment.
"""

from __future__ import annotations

from typing import Iterable

from ..records import Course, CourseType
from .constants import DEFAULT_CONSTANTS, LedgerConstants, ShipmentPayoutPolicy


def calculate_delivered_value(course: Course, constants: LedgerConstants = DEFAULT_CONSTANTS) -> float:
    """Return the value of the work actually delivered for ``course``.

    Deliveries earn the delivered articles plus the delivery fee, and the fee
    only when at least one article was delivered.
    """

    if course.course_type is CourseType.SHIPMENT and course.shipment is not None:
        if not course.completed:
            return 0.0
        if (
            constants.shipment_payout_policy is ShipmentPayoutPolicy.ADMIN_VALIDATION
            and not course.shipment.validated
        ):
            return 0.0
        return constants.shipment_fee

    if course.course_type is CourseType.DELIVERY and course.delivery is not None:
        delivered = [article for article in course.delivery.articles if article.is_delivered]
        articles_total = sum(article.line_value for article in delivered)
        delivery_fee = course.delivery.delivery_fee if delivered else 0.0
        return articles_total + delivery_fee

    return 0.0


def is_course_completed(course: Course) -> bool:
    """Return whether the course counts as done, ignoring stale stored flags."""

    if course.course_type is CourseType.SHIPMENT:
        return course.completed
    if course.course_type is CourseType.DELIVERY and course.delivery is not None:
        return any(article.is_delivered for article in course.delivery.articles)
    return False


def calculate_articles_received_value(course: Course) -> float:
    """Total value of every article handed over, whatever its status."""

    return sum(article.line_value for article in course.articles)


def calculate_unreturned_value(course: Course) -> float:
    """Value of undelivered articles not yet returned to the admin."""

    return sum(article.line_value for article in course.articles if article.is_outstanding)


def calculate_validated_shipment_fees(courses: Iterable[Course]) -> float:
    """Sum carrier fees of shipments both completed and validated by an admin."""

    return sum(
        course.shipment.shipment_fee
        for course in courses
        if course.shipment is not None and course.completed and course.shipment.validated
    )
