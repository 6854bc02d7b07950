from __future__ import annotations

from motoin.domain.paging import Paging
from motoin.entrypoints.http.dtos.common import PageQueryDTO, PaginationDTO


def to_domain_paging(dto: PageQueryDTO) -> Paging:
    return Paging(page=dto.page, per_page=dto.per_page)


def to_pagination(paging: Paging, total: int) -> PaginationDTO:
    return PaginationDTO(
        page=paging.page,
        per_page=paging.per_page,
        total=total,
        total_pages=paging.total_pages(total),
    )
