from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from vod_edge.api import health, metadata, playlists
from vod_edge.core.config import settings
from vod_edge.services.ivs_service import IVSService
from vod_edge.services.s3_service import S3Service

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL))


@asynccontextmanager
async def lifespan(app: FastAPI):
	app.state.s3_service = S3Service()
	app.state.ivs_service = IVSService()
	yield


app = FastAPI(
	title=settings.APP_NAME,
	version=settings.APP_VERSION,
	docs_url="/docs",
	redoc_url="/redoc",
	lifespan=lifespan
)

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.ALLOWED_ORIGINS,
	allow_credentials=False,
	allow_methods=["GET"],
	allow_headers=["*"],
)


app.include_router(health.router, tags=["health"])
app.include_router(metadata.router, tags=["metadata"])
app.include_router(playlists.router, tags=["playlists"])



if __name__ == '__main__':
	import uvicorn
	uvicorn.run("vod_edge.main:app", host='0.0.0.0', port=8000, reload=True)
