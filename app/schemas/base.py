from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Range of the INTEGER columns ids, durations and minutes are stored in
INT32_MIN = -2_147_483_648
INT32_MAX = 2_147_483_647

DbId = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


class ApiModel(BaseModel):
    """
    Base for every request/response body.
    JSON on the wire is camelCase (isPremium, playCount); snake_case is accepted on input too.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
