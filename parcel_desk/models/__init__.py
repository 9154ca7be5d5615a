"""SQLAlchemy ORM 모델 패키지.

SQLAlchemy ORM models package — Importing from this package registers
all models with the declarative metadata used by init_db().
"""

from parcel_desk.models.package import Package, PackageStatus

__all__ = ["Package", "PackageStatus"]
