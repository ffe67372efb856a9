from fastapi import APIRouter, Depends, Request
from vod_edge.api.deps import as_http_response, get_edge_context
from vod_edge.handlers import handle_metadata_request
from vod_edge.models.schemas import EdgeContext

router = APIRouter()


@router.get("/recording-started-latest{suffix:path}.json")
async def get_latest_recording_start_meta(suffix: str, request: Request,
                                          context: EdgeContext = Depends(get_edge_context)):
    response = handle_metadata_request(
        f"recording-started-latest{suffix}.json",
        context,
        request.app.state.s3_service,
        request.app.state.ivs_service,
    )
    return as_http_response(response)
