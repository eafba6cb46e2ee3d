from fastapi import APIRouter

from lead_validator.core.req_parser import parse_requisition
from lead_validator.core.schemas import ParsedRequisition, RequisitionRequest

router = APIRouter(tags=["requisition"])


@router.post(
    "/requisition/parse",
    response_model=ParsedRequisition,
    summary="Parse a requisition",
    description="Show how a req string is split into meta fields and comment sections. Useful when writing requisitions.",
)
def parse_req(body: RequisitionRequest):
    return parse_requisition(body.req)
