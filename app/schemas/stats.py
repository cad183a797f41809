from app.schemas.base import ApiModel


class SessionUsage(ApiModel):
    id: int
    title: str
    play_count: int


class UsageStats(ApiModel):
    user_count: int
    sessions: list[SessionUsage]
