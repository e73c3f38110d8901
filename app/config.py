"""
Settings
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache
from dotenv import load_dotenv

from ranking.sectors import DEFAULT_SECTOR_SIZE

load_dotenv()


class SupabaseConfig(BaseSettings):
    """Supabase settings"""

    supabase_url: str = Field(default="", description="Supabase Project URL")
    supabase_key: str = Field(default="", description="Supabase anon key")

    class Config:
        env_prefix = ""
        case_sensitive = False
        extra = "ignore"


class StandingsConfig(BaseSettings):
    """Defaults for results and criterium standings"""

    default_penalty_points: int = Field(default=20, ge=0, description="Points for a missed event")
    default_exclude_count: int = Field(default=0, ge=0, description="Worst results dropped")
    default_sector_size: int = Field(default=DEFAULT_SECTOR_SIZE, ge=1, description="Size of a new sector")
    weighing_link_hours: int = Field(default=24, ge=1, description="Validity of weigh-in access links")

    class Config:
        env_prefix = "STANDINGS_"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_supabase_config() -> SupabaseConfig:
    return SupabaseConfig()


@lru_cache()
def get_standings_config() -> StandingsConfig:
    return StandingsConfig()
