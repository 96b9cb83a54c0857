"""SQLAlchemy 2.0 async parcel store."""

from litestar_colis.contrib.sqlalchemy.models import Base, ParcelModel
from litestar_colis.contrib.sqlalchemy.repository import SQLAlchemyParcelStore

__all__ = ["Base", "ParcelModel", "SQLAlchemyParcelStore"]
