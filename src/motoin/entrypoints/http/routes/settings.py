from fastapi import APIRouter, Depends

from motoin.entrypoints.http.dependencies import (
    get_maintenance_mode_use_case,
    get_set_maintenance_mode_use_case,
    require_admin,
)
from motoin.entrypoints.http.dtos.settings import MaintenanceDTO
from motoin.entrypoints.http.error_responses import error_responses
from motoin.use_cases.maintenance_mode import GetMaintenanceMode, SetMaintenanceMode

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get(
    "/maintenance",
    response_model=MaintenanceDTO,
    summary="Maintenance mode",
    description="Off unless an admin has enabled it.",
)
def get_maintenance(
    use_case: GetMaintenanceMode = Depends(get_maintenance_mode_use_case),
) -> MaintenanceDTO:
    return MaintenanceDTO(enabled=use_case.execute())


@router.patch(
    "/maintenance",
    response_model=MaintenanceDTO,
    summary="Turn maintenance mode on or off",
    dependencies=[Depends(require_admin)],
    responses=error_responses(401, 403, 422),
)
def set_maintenance(
    body: MaintenanceDTO,
    use_case: SetMaintenanceMode = Depends(get_set_maintenance_mode_use_case),
) -> MaintenanceDTO:
    return MaintenanceDTO(enabled=use_case.execute(body.enabled))
