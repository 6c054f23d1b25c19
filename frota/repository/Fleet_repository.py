from typing import Optional

from sqlalchemy.orm import Session

from frota.models.Fleet import Document, Driver, MaintenanceSchedule, PreDepartureChecklist, Vehicle
from frota.repository.Base_repository import BaseRepo


class VehicleRepo(BaseRepo):
    def __init__(self, session: Optional[Session] = None):
        super().__init__(Vehicle, session=session)


class DriverRepo(BaseRepo):
    def __init__(self, session: Optional[Session] = None):
        super().__init__(Driver, session=session)


class DocumentRepo(BaseRepo):
    def __init__(self, session: Optional[Session] = None):
        super().__init__(Document, session=session)


class ChecklistRepo(BaseRepo):
    def __init__(self, session: Optional[Session] = None):
        super().__init__(PreDepartureChecklist, session=session)


class MaintenanceScheduleRepo(BaseRepo):
    def __init__(self, session: Optional[Session] = None):
        super().__init__(MaintenanceSchedule, session=session)
