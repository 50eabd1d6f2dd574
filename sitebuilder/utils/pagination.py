from dataclasses import dataclass

from fastapi import Query

from sitebuilder.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


@dataclass
class Pagination:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def pagination_params(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> Pagination:
    return Pagination(page=page, limit=limit)
