from pydantic import BaseModel


class MaintenanceDTO(BaseModel):
    enabled: bool
