"""
Supabase record store

Tables: saved_competitions, criterium_folders, club_details,
calendar_events, weighing_access_links
"""
from datetime import date
from typing import List, Optional, Dict, Any
from supabase import create_client, Client
from loguru import logger

from app.config import get_supabase_config
from data_pipeline.normalizer import row_to_competition, row_to_folder, competition_to_row
from data_pipeline.schemas import (
    SavedCompetitionSchema,
    CriteriumFolderSchema,
    ClubDetailsSchema,
    CalendarEventSchema,
    WeighingAccessLinkSchema,
    CompetitionType,
)
from ranking.criterium import order_by_competition_number, competition_label


# singleton client
_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Shared Supabase client instance"""
    global _supabase_client
    if _supabase_client is None:
        config = get_supabase_config()
        if not config.supabase_url or not config.supabase_key:
            raise ValueError("Set the SUPABASE_URL and SUPABASE_KEY environment variables")
        _supabase_client = create_client(config.supabase_url, config.supabase_key)
    return _supabase_client


class SupabaseDB:
    """Supabase database client"""

    def __init__(self, client: Optional[Client] = None):
        self.client: Client = client if client is not None else get_supabase_client()

    # ==================== Saved competitions ====================

    async def load_competitions(self) -> List[SavedCompetitionSchema]:
        """All saved competitions, newest first"""
        try:
            result = self.client.table("saved_competitions").select("*").order(
                "created_at", desc=True
            ).execute()
            return [row_to_competition(row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error loading competitions: {e}")
            return []

    async def get_competition(self, competition_id: str) -> Optional[SavedCompetitionSchema]:
        try:
            result = self.client.table("saved_competitions").select("*").eq(
                "id", competition_id
            ).execute()
            if result.data:
                return row_to_competition(result.data[0])
            return None
        except Exception as e:
            logger.error(f"Error loading competition {competition_id}: {e}")
            return None

    def _select_existing(self, name: str, competition_date: date, location: str) -> Optional[SavedCompetitionSchema]:
        result = self.client.table("saved_competitions").select("*").eq(
            "name", name
        ).eq("date", competition_date.isoformat()).eq("location", location).execute()
        if result.data:
            return row_to_competition(result.data[0])
        return None

    async def find_existing_competition(
        self,
        name: str,
        competition_date: date,
        location: str,
    ) -> Optional[SavedCompetitionSchema]:
        """Competition with the same name, date and location"""
        try:
            return self._select_existing(name, competition_date, location)
        except Exception as e:
            logger.error(f"Error looking up competition {name!r}: {e}")
            return None

    async def save_competition(
        self,
        competition: SavedCompetitionSchema,
        user_id: str,
    ) -> Optional[SavedCompetitionSchema]:
        """
        Store a competition, replacing one with the same name/date/location

        Returns:
            the stored competition, or None on failure (nothing is written
            when the lookup of the record to replace fails)
        """
        try:
            existing = self._select_existing(competition.name, competition.date, competition.location)
            if existing and existing.id:
                self.client.table("saved_competitions").delete().eq("id", existing.id).execute()
                logger.info(f"Overwriting competition {competition.name!r} ({existing.id})")

            result = self.client.table("saved_competitions").insert(
                competition_to_row(competition, user_id)
            ).execute()

            if result.data:
                return row_to_competition(result.data[0])
            return None
        except Exception as e:
            logger.error(f"Error saving competition {competition.name!r}: {e}")
            return None

    async def update_competition(self, competition_id: str, updates: Dict[str, Any]) -> bool:
        try:
            self.client.table("saved_competitions").update(updates).eq("id", competition_id).execute()
            return True
        except Exception as e:
            logger.error(f"Error updating competition {competition_id}: {e}")
            return False

    async def remove_competition(self, competition_id: str) -> bool:
        try:
            self.client.table("saved_competitions").delete().eq("id", competition_id).execute()
            return True
        except Exception as e:
            logger.error(f"Error removing competition {competition_id}: {e}")
            return False

    async def get_competitions_by_type(self, competition_type: CompetitionType) -> List[SavedCompetitionSchema]:
        """Competitions of a type; criterium types only list unfiled ones"""
        competition_type = CompetitionType(competition_type)
        try:
            query = self.client.table("saved_competitions").select("*").eq("type", competition_type.value)
            if competition_type.is_criterium:
                query = query.is_("criterium_folder_id", "null")
            result = query.order("created_at", desc=True).execute()
            return [row_to_competition(row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error loading {competition_type.value} competitions: {e}")
            return []

    async def get_competitions_by_folder(self, folder_id: str) -> List[SavedCompetitionSchema]:
        """Folder competitions in W-number order"""
        try:
            result = self.client.table("saved_competitions").select("*").eq(
                "criterium_folder_id", folder_id
            ).order("created_at").execute()
            competitions = [row_to_competition(row) for row in result.data or []]
            return order_by_competition_number(competitions, lambda c: c.name)
        except Exception as e:
            logger.error(f"Error loading competitions of folder {folder_id}: {e}")
            return []

    async def get_next_competition_number(self, folder_id: str) -> int:
        competitions = await self.get_competitions_by_folder(folder_id)
        return len(competitions) + 1

    async def get_next_competition_name(self, folder_id: str) -> str:
        """'W<n>' proposed for the next event of a folder"""
        return competition_label(await self.get_next_competition_number(folder_id))

    # ==================== Criterium folders ====================

    async def load_folders(self) -> List[CriteriumFolderSchema]:
        try:
            result = self.client.table("criterium_folders").select("*").order(
                "created_at", desc=True
            ).execute()
            return [row_to_folder(row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error loading criterium folders: {e}")
            return []

    async def get_folder(self, folder_id: str) -> Optional[CriteriumFolderSchema]:
        try:
            result = self.client.table("criterium_folders").select("*").eq("id", folder_id).execute()
            if result.data:
                return row_to_folder(result.data[0])
            return None
        except Exception as e:
            logger.error(f"Error loading criterium folder {folder_id}: {e}")
            return None

    async def get_folders_by_type(self, folder_type: str) -> List[CriteriumFolderSchema]:
        try:
            result = self.client.table("criterium_folders").select("*").eq(
                "type", folder_type
            ).order("created_at", desc=True).execute()
            return [row_to_folder(row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error loading {folder_type} folders: {e}")
            return []

    async def add_folder(self, name: str, folder_type: str, user_id: str) -> Optional[CriteriumFolderSchema]:
        folder = CriteriumFolderSchema(name=name, type=folder_type, user_id=user_id)
        try:
            result = self.client.table("criterium_folders").insert(
                folder.model_dump(exclude_none=True)
            ).execute()
            if result.data:
                return row_to_folder(result.data[0])
            return None
        except Exception as e:
            logger.error(f"Error adding criterium folder {name!r}: {e}")
            return None

    async def rename_folder(self, folder_id: str, name: str) -> bool:
        name = name.strip()
        if not name:
            raise ValueError("Folder name cannot be empty")
        try:
            self.client.table("criterium_folders").update({"name": name}).eq("id", folder_id).execute()
            return True
        except Exception as e:
            logger.error(f"Error renaming criterium folder {folder_id}: {e}")
            return False

    async def remove_folder(self, folder_id: str) -> bool:
        """Delete a folder; its competitions are kept and become unfiled"""
        try:
            self.client.table("saved_competitions").update(
                {"criterium_folder_id": None}
            ).eq("criterium_folder_id", folder_id).execute()
            self.client.table("criterium_folders").delete().eq("id", folder_id).execute()
            return True
        except Exception as e:
            logger.error(f"Error removing criterium folder {folder_id}: {e}")
            return False

    # ==================== Club profile ====================

    async def get_club_details(self, user_id: str) -> Optional[ClubDetailsSchema]:
        try:
            result = self.client.table("club_details").select("*").eq("user_id", user_id).execute()
            if result.data:
                return ClubDetailsSchema(**result.data[0])
            return None
        except Exception as e:
            logger.error(f"Error loading club details: {e}")
            return None

    async def save_club_details(self, details: ClubDetailsSchema, user_id: str) -> bool:
        """Insert or update the single club profile of a user"""
        data = details.model_dump(exclude={"id"}, by_alias=False)
        data["user_id"] = user_id
        try:
            self.client.table("club_details").upsert(data, on_conflict="user_id").execute()
            return True
        except Exception as e:
            logger.error(f"Error saving club details: {e}")
            return False

    # ==================== Calendar ====================

    async def list_calendar_events(self, from_date: Optional[date] = None) -> List[CalendarEventSchema]:
        """Calendar events in date order, optionally from a date on"""
        try:
            query = self.client.table("calendar_events").select("*")
            if from_date:
                query = query.gte("date", from_date.isoformat())
            result = query.order("date").execute()
            return [CalendarEventSchema(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error loading calendar: {e}")
            return []

    async def save_calendar_event(self, event: CalendarEventSchema) -> Optional[CalendarEventSchema]:
        try:
            result = self.client.table("calendar_events").upsert(
                event.model_dump(mode="json", exclude_none=True)
            ).execute()
            if result.data:
                return CalendarEventSchema(**result.data[0])
            return None
        except Exception as e:
            logger.error(f"Error saving calendar event {event.name!r}: {e}")
            return None

    async def delete_calendar_event(self, event_id: str) -> bool:
        try:
            self.client.table("calendar_events").delete().eq("id", event_id).execute()
            return True
        except Exception as e:
            logger.error(f"Error deleting calendar event {event_id}: {e}")
            return False

    # ==================== Weigh-in access links ====================

    async def create_access_link(self, link: WeighingAccessLinkSchema) -> Optional[WeighingAccessLinkSchema]:
        try:
            result = self.client.table("weighing_access_links").insert(
                link.model_dump(mode="json", exclude_none=True)
            ).execute()
            if result.data:
                return WeighingAccessLinkSchema(**result.data[0])
            return None
        except Exception as e:
            logger.error(f"Error creating weigh-in access link: {e}")
            return None

    async def get_access_link(self, link_id: str) -> Optional[WeighingAccessLinkSchema]:
        try:
            result = self.client.table("weighing_access_links").select("*").eq("id", link_id).execute()
            if result.data:
                return WeighingAccessLinkSchema(**result.data[0])
            return None
        except Exception as e:
            logger.error(f"Error loading weigh-in access link {link_id}: {e}")
            return None
