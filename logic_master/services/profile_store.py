"""Local key-value persistence for the player profile and cached blobs."""
import logging
import random
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from logic_master.config import settings
from logic_master.db.models import StoredBlob
from logic_master.schemas import UserProfile
from logic_master.services.achievements import default_achievements

logger = logging.getLogger(__name__)


def create_default_profile() -> UserProfile:
    """A brand-new profile with starting coins and the default achievements."""
    now = datetime.now(timezone.utc)
    return UserProfile(
        id=f"user-{int(time.time() * 1000)}-{random.randint(0, 999999)}",
        username=f"Player{random.randint(0, 999999)}",
        created_at=now,
        last_login=now,
        achievements=default_achievements(),
    )


class ProfileStore:
    """
    Synchronous key-value store backed by the ``stored_blobs`` table.

    Each call opens and closes its own database session, so the store can be
    shared by long-lived services.

    Args:
        session_factory: Callable returning a new SQLAlchemy Session
        profile_key: Key holding the profile blob
    """

    def __init__(self, session_factory: Callable[[], Session], profile_key: Optional[str] = None):
        self._session_factory = session_factory
        self.profile_key = profile_key or settings.PROFILE_STORAGE_KEY

    def load_blob(self, key: str) -> Optional[str]:
        """Raw stored text for ``key``, or None when absent."""
        db = self._session_factory()
        try:
            blob = db.query(StoredBlob).filter(StoredBlob.key == key).first()
            return blob.value if blob else None
        finally:
            db.close()

    def save_blob(self, key: str, value: str) -> bool:
        """
        Insert or replace the blob under ``key``.

        Returns:
            True on success, False if the write failed (rolled back and logged)
        """
        db = self._session_factory()
        try:
            blob = db.query(StoredBlob).filter(StoredBlob.key == key).first()
            if blob is None:
                db.add(StoredBlob(key=key, value=value))
            else:
                blob.value = value
            db.commit()
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save blob {key}: {e}")
            return False
        finally:
            db.close()

    def load(self) -> Optional[UserProfile]:
        """
        Load the stored profile.

        Returns:
            UserProfile, or None when nothing is stored or the stored data is
            corrupt (the caller substitutes a fresh profile)
        """
        raw = self.load_blob(self.profile_key)
        if raw is None:
            return None

        try:
            return UserProfile.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Stored profile is malformed, ignoring it: {e.error_count()} errors")
            return None

    def save(self, profile: UserProfile) -> bool:
        """Persist the profile as a single JSON blob."""
        return self.save_blob(self.profile_key, profile.model_dump_json())
