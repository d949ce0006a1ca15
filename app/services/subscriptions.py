from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.dates import InvalidDateFormat, month_bounds, parse_month_year
from app.core.errors import NotFoundError, StoreError, ValidationError
from app.models import Subscription
from app.schemas.subscriptions import CreateSubscriptionRequest, UpdateSubscriptionRequest

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_uuid(raw: str, field: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError):
        raise ValidationError(f"invalid {field} format")


def parse_date_field(raw: str, field: str) -> date:
    try:
        return parse_month_year(raw)
    except InvalidDateFormat:
        raise ValidationError(f"invalid {field} format, expected MM-YYYY")


def _active():
    return select(Subscription).where(Subscription.deleted_at.is_(None))


def _commit(db: Session, failure: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("%s: %s", failure, e)
        raise StoreError(failure) from e


def get_subscription(db: Session, subscription_id: uuid.UUID) -> Subscription:
    """Return a non-deleted subscription or raise NotFoundError."""
    try:
        sub = db.scalar(_active().where(Subscription.id == subscription_id))
    except SQLAlchemyError as e:
        logger.error("failed to get subscription %s: %s", subscription_id, e)
        raise StoreError("failed to get subscription") from e

    if not sub:
        raise NotFoundError("subscription not found")
    return sub


def retrieve_subscription(db: Session, subscription_id: uuid.UUID) -> Subscription:
    sub = get_subscription(db, subscription_id)
    logger.info("Retrieved subscription: %s", subscription_id)
    return sub


def create_subscription(db: Session, payload: CreateSubscriptionRequest) -> Subscription:
    user_id = parse_uuid(payload.user_id, "user_id")
    start_date = parse_date_field(payload.start_date, "start_date")
    end_date = parse_date_field(payload.end_date, "end_date") if payload.end_date else None

    sub = Subscription(
        service_name=payload.service_name,
        price=payload.price,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
    )
    db.add(sub)
    _commit(db, "failed to create subscription")
    db.refresh(sub)

    logger.info("Created subscription with ID: %s", sub.id)
    return sub


def update_subscription(
    db: Session, subscription_id: uuid.UUID, payload: UpdateSubscriptionRequest
) -> Subscription:
    sub = get_subscription(db, subscription_id)

    # text fields: empty means "leave as is"; price: presence means "set"
    if payload.service_name:
        sub.service_name = payload.service_name
    if payload.price is not None:
        sub.price = payload.price
    if payload.user_id:
        sub.user_id = parse_uuid(payload.user_id, "user_id")
    if payload.start_date:
        sub.start_date = parse_date_field(payload.start_date, "start_date")
    if "end_date" in payload.model_fields_set:
        sub.end_date = parse_date_field(payload.end_date, "end_date") if payload.end_date else None

    _commit(db, "failed to update subscription")
    db.refresh(sub)

    logger.info("Updated subscription: %s", subscription_id)
    return sub


def delete_subscription(db: Session, subscription_id: uuid.UUID) -> None:
    sub = get_subscription(db, subscription_id)
    sub.deleted_at = _utcnow()
    _commit(db, "failed to delete subscription")

    logger.info("Deleted subscription: %s", subscription_id)


def list_subscriptions(db: Session, page: int, limit: int) -> tuple[list[Subscription], int]:
    offset = (page - 1) * limit
    try:
        total = db.scalar(
            select(func.count()).select_from(Subscription).where(Subscription.deleted_at.is_(None))
        ) or 0
        rows = db.scalars(
            _active()
            .order_by(Subscription.created_at, Subscription.id)
            .offset(offset)
            .limit(limit)
        ).all()
    except SQLAlchemyError as e:
        logger.error("failed to list subscriptions: %s", e)
        raise StoreError("failed to list subscriptions") from e

    logger.info("Listed subscriptions: page=%d, limit=%d, total=%d", page, limit, total)
    return list(rows), total


def calculate_total_cost(
    db: Session,
    start_date: str = "",
    end_date: str = "",
    user_id: str = "",
    service_name: str = "",
) -> int:
    """Sum ``price`` over non-deleted subscriptions matching the filters.

    A subscription counts when its active interval overlaps the requested
    one: it started on or before the last day of the period and has no end
    date or ends on or after the first day. With a single bound the period
    collapses to that one month.
    """
    query = select(func.coalesce(func.sum(Subscription.price), 0)).where(Subscription.deleted_at.is_(None))

    if user_id:
        query = query.where(Subscription.user_id == parse_uuid(user_id, "user_id"))
    if service_name:
        query = query.where(Subscription.service_name == service_name)

    period = None
    if start_date and end_date:
        first, _ = month_bounds(parse_date_field(start_date, "start_date"))
        _, last = month_bounds(parse_date_field(end_date, "end_date"))
        period = (first, last)
    elif start_date:
        period = month_bounds(parse_date_field(start_date, "start_date"))
    elif end_date:
        period = month_bounds(parse_date_field(end_date, "end_date"))

    if period is not None:
        first, last = period
        query = query.where(Subscription.start_date <= last).where(
            (Subscription.end_date.is_(None)) | (Subscription.end_date >= first)
        )

    try:
        total = db.scalar(query) or 0
    except SQLAlchemyError as e:
        logger.error("failed to calculate total cost: %s", e)
        raise StoreError("failed to calculate total cost") from e

    logger.info("Calculated total cost: %d", total)
    return int(total)
