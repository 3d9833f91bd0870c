from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import generate_password_hash

from .attendance.memory_attendance_repository import MemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .core.enums import Role
from .database.bootstrap import DEMO_USERS
from .database.connection import DatabaseConnection, DBConfig
from .products.memory_product_repository import MemoryProductRepository
from .products.mysql_product_repository import MySQLProductRepository
from .products.repository import ProductRepository
from .reports.memory_work_report_repository import MemoryWorkReportRepository
from .reports.mysql_work_report_repository import MySQLWorkReportRepository
from .reports.repository import WorkReportRepository
from .sales.memory_sale_repository import MemorySaleRepository
from .sales.mysql_sale_repository import MySQLSaleRepository
from .sales.repository import SaleRepository
from .users.memory_user_repository import MemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository

logger = logging.getLogger(__name__)

BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Storage:
    """Repositories of one backend, handed to services as a single handle."""

    backend: str
    users: UserRepository
    attendance: AttendanceRepository
    sales: SaleRepository
    products: ProductRepository
    reports: WorkReportRepository
    conn: Optional[DatabaseConnection] = None

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
        logger.debug("Closed %s storage", self.backend)


def mysql_storage(db_config: dict) -> Storage:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    return Storage(
        backend="mysql",
        users=MySQLUserRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        sales=MySQLSaleRepository(conn),
        products=MySQLProductRepository(conn),
        reports=MySQLWorkReportRepository(conn),
        conn=conn,
    )


def memory_storage() -> Storage:
    return Storage(
        backend="memory",
        users=MemoryUserRepository(),
        attendance=MemoryAttendanceRepository(),
        sales=MemorySaleRepository(),
        products=MemoryProductRepository(),
        reports=MemoryWorkReportRepository(),
    )


def seed_demo_users(users: UserRepository) -> None:
    """Create the demo accounts that are missing (the MySQL backend uses ensure_demo_users)."""
    for username, email, password, role, full_name in DEMO_USERS:
        if users.get_by_email(email):
            continue
        users.create(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role(role),
            full_name=full_name,
        )


def build_storage(settings) -> Storage:
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    if backend == "mysql":
        return mysql_storage(getattr(settings, "DB_CONFIG"))
    if backend == "memory":
        storage = memory_storage()
        if getattr(settings, "AUTO_SEED_DB", False):
            seed_demo_users(storage.users)
        return storage
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r} (expected one of {', '.join(BACKENDS)})")
