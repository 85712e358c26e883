"""Database layer package for all SQL and persistence boundaries."""

from .analytics_reads import SQLAlchemyAnalyticsReadService
from .health import SQLAlchemyDatabaseHealthService
from .interfaces import (
	AnalyticsReadRepositoryPort,
	AudioClipRecord,
	CategoryRecord,
	DatabaseHealthPort,
	VoteRecord,
)
from .session import db_create_engine

__all__ = [
	"AnalyticsReadRepositoryPort",
	"AudioClipRecord",
	"CategoryRecord",
	"DatabaseHealthPort",
	"VoteRecord",
	"SQLAlchemyAnalyticsReadService",
	"SQLAlchemyDatabaseHealthService",
	"db_create_engine",
]
