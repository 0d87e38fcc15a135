# backend/app/dependencies.py
from fastapi import Request

from app.core.mailer import MailDispatcher
from app.core.settings import Settings, settings


def get_settings() -> Settings:
    return settings


def get_dispatcher(request: Request) -> MailDispatcher:
    # Built once in app.main and shared read-only by every request
    return request.app.state.dispatcher
