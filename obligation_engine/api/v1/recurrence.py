"""POST /v1/recurrence/next - Next occurrence of a recurrence rule"""

from fastapi import APIRouter, Request

from obligation_engine.api.dependencies import get_request_id, reject, wall_clock
from obligation_engine.api.v1.schemas import RecurrenceRequest, RecurrenceResponse
from obligation_engine.domain.exceptions import DomainException
from obligation_engine.domain.recurrence import next_occurrence

router = APIRouter()


@router.post("/recurrence/next", response_model=RecurrenceResponse)
def get_next_occurrence(request_body: RecurrenceRequest, request: Request):
    """Next due date for a day-of-month or named-period rule after the given moment"""
    try:
        next_date = next_occurrence(request_body.to_rule(), after=wall_clock(request_body.after))
    except DomainException as e:
        raise reject(e, get_request_id(request))

    return RecurrenceResponse(next_occurrence=next_date)
