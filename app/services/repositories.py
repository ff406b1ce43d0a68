"""
Repository layer over the relational store.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional, Set

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.errors import PersistenceError
from app.models import Photo, Seat, Setting, Table, Vote
from app.schemas.seating import TableSchema

logger = logging.getLogger(__name__)


# -------- Table repository --------

class TableRepo:
    @staticmethod
    def list_all(db: Session) -> List[Table]:
        return (
            db.query(Table)
            .options(selectinload(Table.seats))
            .order_by(Table.sort_order, Table.id)
            .all()
        )

    @staticmethod
    def count(db: Session) -> int:
        return db.query(Table).count()

    @staticmethod
    def replace_all(db: Session, tables: List[TableSchema]) -> None:
        """Replace every stored table and seat with ``tables`` in one transaction"""
        db.expunge_all()
        try:
            db.query(Seat).delete(synchronize_session=False)
            db.query(Table).delete(synchronize_session=False)
            for order, table in enumerate(tables):
                db.add(Table(id=table.id, name=table.name, x=table.x, y=table.y, sort_order=order))
                for seat in table.seats:
                    db.add(Seat(
                        id=seat.id,
                        table_id=table.id,
                        seat_number=seat.seat_number,
                        attendee_name=seat.attendee_name,
                    ))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save tables: {e}")
            raise PersistenceError("Failed to save data") from e
        logger.info(f"Saved {len(tables)} tables")


# -------- Photo repository --------

class PhotoRepo:
    @staticmethod
    def create(db: Session, photo: Photo) -> Photo:
        try:
            db.add(photo)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError("Failed to store photo") from e
        db.refresh(photo)
        return photo

    @staticmethod
    def get(db: Session, photo_id: str) -> Optional[Photo]:
        return db.query(Photo).filter(Photo.id == photo_id).first()

    @staticmethod
    def list_ranked(db: Session) -> List[Photo]:
        return db.query(Photo).order_by(Photo.vote_count.desc(), Photo.created_at.asc()).all()

    @staticmethod
    def voted_photo_ids(db: Session, voter_ip: str) -> Set[str]:
        rows = db.query(Vote.photo_id).filter(Vote.voter_ip == voter_ip).all()
        return {row.photo_id for row in rows}

    @staticmethod
    def record_vote(db: Session, photo_id: str, voter_ip: str) -> bool:
        """Insert the vote row and bump the counter as one unit.

        Returns False when the (photo, voter IP) pair already voted; the
        unique constraint decides, so concurrent duplicates cannot both pass.
        """
        try:
            db.add(Vote(photo_id=photo_id, voter_ip=voter_ip))
            db.flush()
            db.query(Photo).filter(Photo.id == photo_id).update(
                {Photo.vote_count: Photo.vote_count + 1, Photo.updated_at: datetime.utcnow()},
                synchronize_session=False,
            )
            db.commit()
        except IntegrityError:
            db.rollback()
            return False
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError("Failed to record vote") from e
        return True


# -------- Settings repository --------

class SettingsRepo:
    @staticmethod
    def get_many(db: Session, keys: List[str]) -> Dict[str, str]:
        rows = db.query(Setting).filter(Setting.key.in_(keys)).all()
        return {row.key: row.value for row in rows}

    @staticmethod
    def set_many(db: Session, values: Dict[str, str]) -> None:
        try:
            for key, value in values.items():
                db.merge(Setting(key=key, value=value))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError("Failed to update settings") from e
