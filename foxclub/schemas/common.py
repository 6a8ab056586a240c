"""API 스키마 공용 베이스와 페이지네이션 계약입니다."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # 응답은 camelCase로 직렬화하고, 요청은 camelCase/snake_case 모두 허용한다.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationOut(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class SuccessOut(CamelModel):
    success: bool = True
