"""
Tests for Google account creation and linking
"""

from datetime import datetime, timedelta, timezone

import pytest

from mirror.models.user import User
from mirror.services.oauth_service import upsert_google_user


def google_info(**overrides):
    info = {
        "sub": "google-123",
        "email": "shooter@example.com",
        "name": "Street Shooter",
        "picture": "https://example.com/avatar.png",
    }
    info.update(overrides)
    return info


class TestUpsertGoogleUser:

    def test_creates_new_user(self, db_session):
        user = upsert_google_user(db_session, google_info())

        assert user.id
        assert user.google_id == "google-123"
        assert user.email == "shooter@example.com"
        assert user.display_name == "Street Shooter"
        assert user.profile_picture == "https://example.com/avatar.png"
        assert db_session.query(User).count() == 1

    def test_display_name_defaults_to_email_prefix(self, db_session):
        user = upsert_google_user(db_session, google_info(name=None))
        assert user.display_name == "shooter"

    def test_existing_google_id_updates_login(self, db_session):
        first = upsert_google_user(db_session, google_info())
        first.last_login = datetime.now(timezone.utc) - timedelta(days=3)
        db_session.commit()
        previous_login = first.last_login

        again = upsert_google_user(db_session, google_info(picture="https://example.com/new.png"))

        assert again.id == first.id
        assert again.profile_picture == "https://example.com/new.png"
        assert again.last_login != previous_login
        assert db_session.query(User).count() == 1

    def test_keeps_picture_when_missing(self, db_session):
        upsert_google_user(db_session, google_info())
        user = upsert_google_user(db_session, google_info(picture=None))
        assert user.profile_picture == "https://example.com/avatar.png"

    def test_links_existing_account_by_email(self, db_session, make_user):
        existing, _ = make_user("shooter")

        user = upsert_google_user(db_session, google_info(sub="google-new"))

        assert user.id == existing.id
        assert user.google_id == "google-new"
        assert user.display_name == "shooter"
        assert db_session.query(User).count() == 1

    @pytest.mark.parametrize("missing", ["sub", "email"])
    def test_missing_identity_rejected(self, db_session, missing):
        info = google_info()
        del info[missing]

        with pytest.raises(ValueError):
            upsert_google_user(db_session, info)

        assert db_session.query(User).count() == 0
