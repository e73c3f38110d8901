"""
Weigh-in access links

A club lets a helper enter weights for some sectors of a saved competition.
The link is bound to one e-mail address and expires after a number of hours.
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from loguru import logger

from app.config import get_standings_config
from data_pipeline.schemas import SavedCompetitionSchema, WeighingAccessLinkSchema
from database.supabase_client import SupabaseDB
from ranking.sectors import sector_labels


ACCESS_PATH = "/weging/access"


class WeighingAccessError(ValueError):
    """Access link cannot be created or used"""


def build_access_url(base_url: str, link_id: str) -> str:
    return f"{base_url.rstrip('/')}{ACCESS_PATH}?access={link_id}"


def is_expired(link: WeighingAccessLinkSchema, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now(timezone.utc)
    expires_at = link.expires_at
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at < now


class WeighingAccessService:
    """Creates and checks weigh-in access links"""

    def __init__(self, db: SupabaseDB):
        self.db = db

    async def create_link(
        self,
        competition_id: str,
        sectors: Sequence[str],
        email: str,
        user_id: str,
        hours: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> WeighingAccessLinkSchema:
        """
        Args:
            competition_id: saved competition the helper may weigh in
            sectors: sector labels ('A', 'B', ...)
            email: e-mail address the link is bound to
            user_id: creating user
            hours: validity, defaults to the configured value

        Raises:
            WeighingAccessError: missing competition id, no sectors, or unknown sector
        """
        if not competition_id:
            raise WeighingAccessError("Invalid competition id")
        if not sectors:
            raise WeighingAccessError("Select at least one sector")

        competition = await self.db.get_competition(competition_id)
        if competition is None:
            raise WeighingAccessError("Save the competition before granting weigh-in access")

        known = set(sector_labels(competition.sector_sizes))
        unknown: List[str] = [s for s in sectors if s not in known]
        if unknown:
            raise WeighingAccessError(f"Unknown sector(s): {', '.join(unknown)}")

        hours = hours or get_standings_config().weighing_link_hours
        now = now or datetime.now(timezone.utc)

        link = await self.db.create_access_link(WeighingAccessLinkSchema(
            competition_id=competition_id,
            sectors=list(sectors),
            email=email,
            expires_at=now + timedelta(hours=hours),
            created_by=user_id,
        ))
        if link is None:
            raise WeighingAccessError("Access link could not be stored")

        logger.info(f"Weigh-in access for {email} on sectors {','.join(sectors)} ({hours}h)")
        return link

    async def open_link(
        self,
        link_id: str,
        email: str,
        now: Optional[datetime] = None,
    ) -> SavedCompetitionSchema:
        """
        Competition behind a link, if the link is valid for this e-mail

        Raises:
            WeighingAccessError: unknown, expired, or bound to another e-mail
        """
        if not link_id:
            raise WeighingAccessError("No access link found")

        link = await self.db.get_access_link(link_id)
        if link is None:
            raise WeighingAccessError("Invalid access link")
        if is_expired(link, now):
            raise WeighingAccessError("This access link has expired")
        if link.email.lower() != (email or "").lower():
            raise WeighingAccessError("You do not have access to this weigh-in")

        competition = await self.db.get_competition(link.competition_id)
        if competition is None:
            raise WeighingAccessError("Competition not found")
        return competition
