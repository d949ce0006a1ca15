from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.config import settings
from app.schemas.subscriptions import (
    CreateSubscriptionRequest,
    PaginationOut,
    SubscriptionListOut,
    SubscriptionOut,
    TotalCostFiltersOut,
    TotalCostOut,
    UpdateSubscriptionRequest,
)
from app.services import subscriptions as service

router = APIRouter()


# page and limit stay within a 32-bit INTEGER so OFFSET and LIMIT fit a BIGINT
MAX_QUERY_INT = 2**31 - 1


def _int_or_default(raw: str | None, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if 1 <= value <= MAX_QUERY_INT else default


@router.post(
    "",
    response_model=SubscriptionOut,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_subscription(payload: CreateSubscriptionRequest, db: Session = Depends(get_db)):
    return service.create_subscription(db, payload)


@router.get("", response_model=SubscriptionListOut, response_model_exclude_none=True)
def list_subscriptions(
    page: str | None = Query(default=None, description="Page number, defaults to 1"),
    limit: str | None = Query(default=None, description="Rows per page"),
    db: Session = Depends(get_db),
):
    # unparsable values fall back to defaults instead of failing the request
    page_num = _int_or_default(page, 1)
    limit_num = _int_or_default(limit, settings.default_page_limit)

    rows, total = service.list_subscriptions(db, page_num, limit_num)
    return SubscriptionListOut(
        data=[SubscriptionOut.model_validate(r) for r in rows],
        pagination=PaginationOut(page=page_num, limit=limit_num, total=total),
    )


@router.get("/total-cost", response_model=TotalCostOut)
def calculate_total_cost(
    start_date: str = Query(default="", description="Period start, MM-YYYY"),
    end_date: str = Query(default="", description="Period end, MM-YYYY"),
    user_id: str = Query(default="", description="Owner UUID"),
    service_name: str = Query(default="", description="Exact service name"),
    db: Session = Depends(get_db),
):
    """Sum subscription prices active within the requested month range.

    Must stay declared before ``/{subscription_id}``.
    """
    total = service.calculate_total_cost(
        db,
        start_date=start_date,
        end_date=end_date,
        user_id=user_id,
        service_name=service_name,
    )
    return TotalCostOut(
        total_cost=total,
        filters=TotalCostFiltersOut(
            start_date=start_date,
            end_date=end_date,
            user_id=user_id,
            service_name=service_name,
        ),
    )


@router.get("/{subscription_id}", response_model=SubscriptionOut, response_model_exclude_none=True)
def get_subscription(subscription_id: str, db: Session = Depends(get_db)):
    return service.retrieve_subscription(db, service.parse_uuid(subscription_id, "subscription ID"))


@router.put("/{subscription_id}", response_model=SubscriptionOut, response_model_exclude_none=True)
def update_subscription(
    subscription_id: str,
    payload: UpdateSubscriptionRequest,
    db: Session = Depends(get_db),
):
    return service.update_subscription(db, service.parse_uuid(subscription_id, "subscription ID"), payload)


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(subscription_id: str, db: Session = Depends(get_db)):
    service.delete_subscription(db, service.parse_uuid(subscription_id, "subscription ID"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
