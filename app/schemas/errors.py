from app.schemas.base import ApiModel


class ErrorOut(ApiModel):
    message: str


class ValidationErrorOut(ApiModel):
    message: str
    field: str | None = None
