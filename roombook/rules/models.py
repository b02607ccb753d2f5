from typing import Literal

from pydantic import BaseModel, Field, model_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class StorageRules(BaseModel):
    db_filename: str = "roombook.db"
    migrations_dir: str = "migrations"

class NotificationRules(BaseModel):
    transport: Literal["dev", "email"] = "dev"
    log_level: LogLevel = "INFO"
    recipient: str | None = None  # email transport only

    @model_validator(mode="after")
    def check_recipient(self) -> "NotificationRules":
        if self.transport == "email" and not self.recipient:
            raise ValueError("notifications.recipient is required for the email transport")
        return self

class LoggingRules(BaseModel):
    level: LogLevel = "INFO"

class Rules(BaseModel):
    project: ProjectRules
    storage: StorageRules = Field(default_factory=StorageRules)
    notifications: NotificationRules = Field(default_factory=NotificationRules)
    logging: LoggingRules = Field(default_factory=LoggingRules)
