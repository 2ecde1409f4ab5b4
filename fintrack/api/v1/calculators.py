"""POST /v1/calculators/* - EMI, SIP and SWP projections"""

from fastapi import APIRouter, Request

from fintrack.api.v1.schemas import (
    EMIRequest,
    EMIResponse,
    EMIResultSchema,
    SIPRequest,
    SIPResponse,
    SIPResultSchema,
    SWPRequest,
    SWPResponse,
    SWPResultSchema,
)
from fintrack.api.dependencies import get_request_id
from fintrack.config import settings
from fintrack.domain.projections import calculate_emi, calculate_sip, calculate_swp
from fintrack.infrastructure.observability.metrics import record_calculation
from fintrack.infrastructure.observability.logging import log_calculation

router = APIRouter()


def _track(request: Request, calculator: str, result) -> None:
    computed = result is not None
    record_calculation(calculator, computed)
    log_calculation(get_request_id(request), calculator, computed)


@router.post("/calculators/emi", response_model=EMIResponse)
def emi(request_body: EMIRequest, request: Request):
    """
    Loan EMI with total interest and a yearly amortization breakdown.

    Blank, negative or non-numeric inputs yield {"result": null}.
    """
    result = calculate_emi(
        request_body.principal,
        request_body.annual_rate,
        request_body.years,
        max_breakdown_years=settings.calculator_breakdown_years,
        max_years=settings.max_tenure_years,
    )
    _track(request, "emi", result)

    if result is None:
        return EMIResponse(result=None)
    return EMIResponse(result=EMIResultSchema.model_validate(result, from_attributes=True))


@router.post("/calculators/sip", response_model=SIPResponse)
def sip(request_body: SIPRequest, request: Request):
    """Future value of a monthly investment plan"""
    result = calculate_sip(
        request_body.monthly_investment,
        request_body.annual_rate,
        request_body.years,
        max_years=settings.max_tenure_years,
    )
    _track(request, "sip", result)

    if result is None:
        return SIPResponse(result=None)
    return SIPResponse(result=SIPResultSchema.model_validate(result, from_attributes=True))


@router.post("/calculators/swp", response_model=SWPResponse)
def swp(request_body: SWPRequest, request: Request):
    """Month-by-month withdrawal simulation with a sampled balance series"""
    result = calculate_swp(
        request_body.initial_corpus,
        request_body.monthly_withdrawal,
        request_body.annual_rate,
        request_body.years,
        sample_interval=settings.swp_sample_interval_months,
        max_years=settings.max_tenure_years,
    )
    _track(request, "swp", result)

    if result is None:
        return SWPResponse(result=None)
    return SWPResponse(result=SWPResultSchema.model_validate(result, from_attributes=True))
