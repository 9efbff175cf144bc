from pydantic import BaseModel, Field


class UserInfo(BaseModel):
    """Xtream account block"""
    username: str
    password: str
    auth: int = Field(..., description="1 when the credentials are accepted, 0 otherwise")
    status: str = Field(..., description="'Active' or 'Disabled'")
    is_trial: int = 0
    active_cons: int = 1
    exp_date: int | None = None
    created_at: int = Field(..., description="Unix timestamp of the response")


class ServerInfo(BaseModel):
    """Xtream server block derived from the request host"""
    url: str
    server_protocol: str
    rtmp_port: int = 0
    timezone: str = "UTC"
    timestamp_now: int
    time_now: str = Field(..., description="ISO8601 UTC time")
    port: int
    https_port: int = 443


class LiveChannel(BaseModel):
    """Single catalog entry in Xtream live stream format"""
    name: str
    stream_id: int
    stream_type: str = "live"
    stream_icon: str | None = None
    epg_channel_id: str | None = None
    added: str = Field(..., description="UTC time formatted as 'YYYY-MM-DD HH:MM:SS'")
    category_id: str
    custom_sid: str | None = None
    direct_source: str


class PlayerApiResponse(BaseModel):
    """Response envelope of /player_api.php"""
    user_info: UserInfo
    server_info: ServerInfo
    available_channels: list[LiveChannel] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body of /player_api.php"""
    error: str
