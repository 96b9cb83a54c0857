"""SQLAlchemy 2.0 async ParcelStore implementation."""

from dataclasses import fields
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from litestar_colis.contrib.sqlalchemy.models import ParcelModel
from litestar_colis.exceptions import ConflictError
from litestar_colis.models import ACTIVE_STATUSES, Parcel

_PARCEL_FIELDS = tuple(f.name for f in fields(Parcel))


def _as_utc(value):
    # SQLite drops tzinfo on DateTime(timezone=True) columns.
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_parcel(row: ParcelModel) -> Parcel:
    return Parcel(
        **{name: _as_utc(getattr(row, name)) for name in _PARCEL_FIELDS}
    )


class SQLAlchemyParcelStore:
    """Parcel store backed by SQLAlchemy async sessions.

    Implements the ParcelStore protocol. The partial unique index on
    ``courier_id`` turns a concurrent double pickup into a
    ``ConflictError`` raised from :meth:`save`.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._session_factory = session_factory

    async def get_by_id(self, parcel_id: str) -> Parcel:
        """Get a parcel by ID. Raises KeyError if not found."""
        async with self._session_factory() as session:
            row = await session.get(ParcelModel, parcel_id)
            if row is None:
                raise KeyError(parcel_id)
            return _to_parcel(row)

    async def get_by_reference(self, reference: str) -> Parcel:
        """Get a parcel by reference. Raises KeyError if not found."""
        async with self._session_factory() as session:
            stmt = select(ParcelModel).where(
                ParcelModel.reference == reference
            )
            row = (await session.execute(stmt)).scalar_one_or_none()
            if row is None:
                raise KeyError(reference)
            return _to_parcel(row)

    async def list_active_by_courier(self, courier_id: str) -> list[Parcel]:
        """List parcels of a courier in an active status."""
        async with self._session_factory() as session:
            stmt = select(ParcelModel).where(
                ParcelModel.courier_id == courier_id,
                ParcelModel.status.in_(sorted(ACTIVE_STATUSES)),
            )
            result = await session.execute(stmt)
            return [_to_parcel(row) for row in result.scalars().all()]

    async def list_all(self) -> list[Parcel]:
        """List every parcel, oldest first."""
        async with self._session_factory() as session:
            stmt = select(ParcelModel).order_by(ParcelModel.created_at.asc())
            result = await session.execute(stmt)
            return [_to_parcel(row) for row in result.scalars().all()]

    async def save(self, parcel: Parcel) -> Parcel:
        """Insert a new parcel or update an existing one."""
        values = {name: getattr(parcel, name) for name in _PARCEL_FIELDS}
        async with self._session_factory() as session:
            if parcel.id is None:
                values.pop("id")
                row = ParcelModel(**values)
                session.add(row)
            else:
                row = await session.get(ParcelModel, parcel.id)
                if row is None:
                    raise KeyError(parcel.id)
                for name, value in values.items():
                    setattr(row, name, value)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise ConflictError(
                    f"Parcel {parcel.reference} conflicts with a stored "
                    f"parcel: {exc.orig}"
                ) from exc
            await session.refresh(row)
            return _to_parcel(row)

    async def delete(self, parcel: Parcel) -> None:
        """Delete a parcel. Raises KeyError if not found."""
        async with self._session_factory() as session:
            row = await session.get(ParcelModel, parcel.id)
            if row is None:
                raise KeyError(parcel.id)
            await session.delete(row)
            await session.commit()
