"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from catalog_api.config import Settings
from catalog_api.models.database import get_db


def get_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


# Type aliases for common dependencies
DbSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]
