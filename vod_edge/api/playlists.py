from fastapi import APIRouter, Depends, Request
from vod_edge.api.deps import as_http_response, get_edge_context
from vod_edge.handlers import handle_playlist_request
from vod_edge.models.schemas import EdgeContext

router = APIRouter()


@router.get("/{key_prefix:path}/playlist.m3u8")
async def get_rendition_playlist(key_prefix: str, request: Request,
                                 context: EdgeContext = Depends(get_edge_context)):
    response = handle_playlist_request(
        f"{key_prefix}/playlist.m3u8",
        context,
        request.app.state.s3_service,
        request.app.state.ivs_service,
    )
    return as_http_response(response)
