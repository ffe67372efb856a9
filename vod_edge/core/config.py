from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List

from vod_edge.models.schemas import ChannelRole, EdgeContext


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "VOD Edge Resolver"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    #AWS Configuration
    AWS_REGION: str = Field(default="us-east-1", description="AWS region of the IVS channels and VOD bucket")
    VOD_BUCKET_NAME: str = Field(default="",
                                 description="S3 bucket the IVS recording configuration writes into")

    #Channel ARNs, used when the origin request carries no custom headers
    OVERVIEW_CHANNEL_ARN: str = ""
    INSTRUMENTS_CHANNEL_ARN: str = ""
    CAPT_CHANNEL_ARN: str = ""
    FO_CHANNEL_ARN: str = ""

    #Playlist caching
    PLAYLIST_UPDATE_DELAY_SECONDS: int = Field(default=30, description="IVS rewrites rendition playlists on this cadence")
    WRITE_LATENCY_BUFFER_SECONDS: int = 2
    FINAL_PLAYLIST_MAX_AGE: int = Field(default=31536000, description="1 year, the max TTL of the playlist cache policy")
    METADATA_MAX_AGE: int = 1

    #CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    @property
    def total_update_delay_seconds(self) -> int:
        return self.PLAYLIST_UPDATE_DELAY_SECONDS + self.WRITE_LATENCY_BUFFER_SECONDS

    def default_context(self) -> EdgeContext:
        """EdgeContext built from the environment instead of origin headers."""
        return EdgeContext(
            bucket_name=self.VOD_BUCKET_NAME,
            role_map={
                ChannelRole.OVERVIEW: self.OVERVIEW_CHANNEL_ARN,
                ChannelRole.INSTRUMENTS: self.INSTRUMENTS_CHANNEL_ARN,
                ChannelRole.CAPTAIN: self.CAPT_CHANNEL_ARN,
                ChannelRole.FO: self.FO_CHANNEL_ARN,
            },
        )


settings = Settings()
