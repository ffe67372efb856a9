from fastapi import APIRouter, Request
from vod_edge.models.schemas import HealthResponse
from vod_edge.core.config import settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    s3_service = request.app.state.s3_service
    s3_connected = s3_service.check_connection(settings.VOD_BUCKET_NAME)

    return HealthResponse(
        status="healthy" if s3_connected else "degraded",
        s3_connected=s3_connected,
        version=settings.APP_VERSION
    )
