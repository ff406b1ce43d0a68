"""
Photo voting service
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, VotingClosedError
from app.models import Photo
from app.schemas.photo import PhotoResponse, VotingStatus, VotingStatusUpdate
from app.services.repositories import PhotoRepo, SettingsRepo

logger = logging.getLogger(__name__)

VOTING_ENABLED_KEY = "voting_enabled"
VOTING_STOPPED_KEY = "voting_stopped"


def _to_flag(value, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes")


def to_photo_response(photo: Photo, has_voted: bool = False) -> PhotoResponse:
    response = PhotoResponse.model_validate(photo)
    return response.model_copy(update={"has_voted": has_voted, "image_url": photo.file_path})


class VotingService:
    """Service for voting status and votes"""

    @staticmethod
    def get_status(db: Session) -> VotingStatus:
        values = SettingsRepo.get_many(db, [VOTING_ENABLED_KEY, VOTING_STOPPED_KEY])
        return VotingStatus(
            voting_enabled=_to_flag(values.get(VOTING_ENABLED_KEY), True),
            voting_stopped=_to_flag(values.get(VOTING_STOPPED_KEY), False),
        )

    @staticmethod
    def update_status(db: Session, update: VotingStatusUpdate) -> VotingStatus:
        """Apply the given flags, leaving omitted ones untouched"""
        values = {}
        if update.voting_enabled is not None:
            values[VOTING_ENABLED_KEY] = "true" if update.voting_enabled else "false"
        if update.voting_stopped is not None:
            values[VOTING_STOPPED_KEY] = "true" if update.voting_stopped else "false"
        if values:
            SettingsRepo.set_many(db, values)
            logger.info(f"Voting status updated: {values}")
        return VotingService.get_status(db)

    @staticmethod
    def list_photos(db: Session, voter_ip: str) -> List[PhotoResponse]:
        """Photos ranked by vote count, flagged with whether ``voter_ip`` voted"""
        voted = PhotoRepo.voted_photo_ids(db, voter_ip)
        return [to_photo_response(photo, photo.id in voted) for photo in PhotoRepo.list_ranked(db)]

    @staticmethod
    def vote(db: Session, photo_id: str, voter_ip: str) -> PhotoResponse:
        """Record one vote for ``photo_id`` from ``voter_ip``.

        Raises VotingClosedError when voting is off or frozen, NotFoundError
        for an unknown photo and ConflictError when this IP already voted for
        it. Nothing is written in any of those cases.
        """
        status = VotingService.get_status(db)
        if not status.voting_enabled or status.voting_stopped:
            raise VotingClosedError("投票已关闭")

        if PhotoRepo.get(db, photo_id) is None:
            raise NotFoundError("photo not found", photo_id=photo_id)

        if not PhotoRepo.record_vote(db, photo_id, voter_ip):
            logger.warning(f"Duplicate vote for photo {photo_id} from {voter_ip}")
            raise ConflictError("您已经投过票了")

        logger.info(f"Vote recorded for photo {photo_id} from {voter_ip}")
        photo = PhotoRepo.get(db, photo_id)
        return to_photo_response(photo, has_voted=True)
