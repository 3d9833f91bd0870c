from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .attendance.service import AttendanceService
from .auth.identity import IdentityProvider, build_identity_provider
from .auth.session import SessionValidator
from .core.constants import DEFAULT_ATTENDANCE_LOCATION, DEFAULT_DAILY_SALES_TARGET
from .dashboard.service import DashboardService
from .products.service import ProductService
from .reports.service import WorkReportService
from .sales.service import SaleService
from .storage import Storage, build_storage
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    storage: Storage
    identity: IdentityProvider
    session_validator: SessionValidator

    user_service: UserService
    attendance_service: AttendanceService
    sale_service: SaleService
    product_service: ProductService
    report_service: WorkReportService
    dashboard_service: DashboardService

    auth_config: dict

    def close(self) -> None:
        self.identity.close()
        self.storage.close()


def build_container(
    settings,
    *,
    storage: Optional[Storage] = None,
    identity: Optional[IdentityProvider] = None,
) -> Container:
    storage = storage or build_storage(settings)
    identity = identity or build_identity_provider(settings)

    daily_target = Decimal(str(getattr(settings, "DAILY_SALES_TARGET", DEFAULT_DAILY_SALES_TARGET)))
    location = getattr(settings, "ATTENDANCE_LOCATION", DEFAULT_ATTENDANCE_LOCATION)

    return Container(
        storage=storage,
        identity=identity,
        session_validator=SessionValidator(identity, storage.users),
        user_service=UserService(storage.users),
        attendance_service=AttendanceService(storage.attendance, location=location),
        sale_service=SaleService(storage.sales, storage.products, storage.users, daily_target=daily_target),
        product_service=ProductService(storage.products),
        report_service=WorkReportService(storage.reports, storage.users),
        dashboard_service=DashboardService(
            storage.users,
            storage.attendance,
            storage.sales,
            storage.reports,
            daily_target=daily_target,
        ),
        auth_config={
            "url": getattr(settings, "SUPABASE_URL", ""),
            "anonKey": getattr(settings, "SUPABASE_ANON_KEY", ""),
        },
    )
