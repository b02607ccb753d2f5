from functools import lru_cache

from fastapi import Depends

from roombook.app_shell.config import Settings, prepare_storage
from roombook.app_shell.context import ServiceContext
from roombook.components.booking import BookingSystem, RoomRepoPort
from roombook.rules.loader import load_rules
from roombook.rules.models import Rules


# --- Settings ---
@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


# --- Context ---
@lru_cache
def get_context() -> ServiceContext:
    settings = get_settings()
    rules = get_rules()
    db_path = prepare_storage(settings, rules)
    return ServiceContext.create(db_path=db_path, rules=rules)


# --- Services / Repos ---
def get_booking_system(ctx: ServiceContext = Depends(get_context)) -> BookingSystem:
    return ctx.booking_system


def get_room_repo(ctx: ServiceContext = Depends(get_context)) -> RoomRepoPort:
    return ctx.room_repo
