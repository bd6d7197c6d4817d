from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from campaign_studio.dependencies.services import get_campaign_service
from campaign_studio.schemas.campaign import CampaignRequest, CampaignResult, ErrorResponse
from campaign_studio.services import CampaignService
from campaign_studio.services.exceptions import ServiceError

router = APIRouter()


@router.post(
    "/generate-campaign",
    response_model=CampaignResult,
    response_model_exclude_unset=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_campaign(
    req: CampaignRequest,
    service: CampaignService = Depends(get_campaign_service),
):
    try:
        return await service.generate(req)
    except ServiceError as exc:
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.message).model_dump(),
        )
