"""POST /v1/alerts/plan - Plan notifications for a batch of obligations"""

import time
from fastapi import APIRouter, Depends, Request

from obligation_engine.api.dependencies import get_request_id, get_settings, reject, wall_clock
from obligation_engine.api.v1.schemas import AlertIntentSchema, AlertPlanRequest, AlertPlanResponse
from obligation_engine.config import Settings
from obligation_engine.domain.alerts import plan_alerts
from obligation_engine.domain.exceptions import DomainException
from obligation_engine.infrastructure.observability.logging import log_alert_plan
from obligation_engine.infrastructure.observability.metrics import record_alert_intents

router = APIRouter()


@router.post("/alerts/plan", response_model=AlertPlanResponse)
def create_alert_plan(
    request_body: AlertPlanRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
):
    """
    Decide which alerts should fire now.

    Flow:
    1. Convert the batch into domain records
    2. Plan bill, budget, goal milestone and suspicious activity intents
    3. Record metrics and log the plan
    4. Return intents for the delivery layer, which dedups on identifier
    """
    start_time = time.time()
    request_id = get_request_id(request)

    threshold = request_body.suspicious_threshold
    if threshold is None:
        threshold = app_settings.suspicious_activity_threshold

    try:
        intents = plan_alerts(
            wall_clock(request_body.now),
            bills=[bill.to_domain() for bill in request_body.bills],
            budgets=[budget.to_domain() for budget in request_body.budgets],
            goals=[goal.to_domain() for goal in request_body.goals],
            transactions=[txn.to_domain() for txn in request_body.transactions],
            notified_milestones={
                goal_id: set(identifiers)
                for goal_id, identifiers in request_body.notified_milestones.items()
            },
            suspicious_threshold=threshold,
        )
    except DomainException as e:
        raise reject(e, request_id)

    duration_ms = (time.time() - start_time) * 1000
    record_alert_intents(intents)
    log_alert_plan(request_id, intents, duration_ms)

    return AlertPlanResponse(intents=[AlertIntentSchema.from_domain(intent) for intent in intents])
