"""Dependency providers reading the objects built once by ``create_app``. Override in tests."""

from fastapi import Request

from src.config.settings import Settings
from src.rsvps.repository.base import RecordStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store
