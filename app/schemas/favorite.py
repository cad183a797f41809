from app.schemas.base import ApiModel


class FavoriteStatus(ApiModel):
    is_favorite: bool
