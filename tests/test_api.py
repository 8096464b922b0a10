"""
API tests for mirror.

Covers photos, analyses, opinions, personas, users and health endpoints
against an in-memory database with the model calls scripted.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest

from mirror.config import settings
from mirror.models.analysis import Analysis
from mirror.models.opinion import Opinion
from mirror.models.photo import Photo


def upload(client, data, headers=None, filename="photo.jpg"):
    return client.post(
        "/api/v1/photos/upload",
        files={"file": (filename, data, "image/jpeg")},
        headers=headers or {},
    )


def add_analysis(db_session, photo_id, user_id=None, score=70, created_at=None, **kwargs):
    """Insert an analysis row directly"""
    analysis = Analysis(
        photo_id=photo_id,
        user_id=user_id,
        persona="film-bro",
        language="en",
        detected_genre="Street Photography",
        summary="Moody street at night",
        overall_score=score,
        tags=["street"],
        category_scores={"composition": 70, "lighting": 70, "color": 70, "focus": 70, "creativity": 70},
        analysis={"overall": {"text": "ok"}},
        created_at=created_at or datetime.now(timezone.utc),
        **kwargs,
    )
    db_session.add(analysis)
    db_session.commit()
    db_session.refresh(analysis)
    return analysis


class TestHealthAPI:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ai_health_without_key(self, client):
        response = client.get("/health/ai")
        assert response.status_code == 503
        assert response.json()["status"] == "unavailable"


class TestPersonasAPI:

    def test_list(self, client):
        response = client.get("/api/v1/personas")
        assert response.status_code == 200
        keys = [p["key"] for p in response.json()]
        assert len(keys) == 9
        assert "brutal-critic" in keys


class TestPhotoUploadAPI:

    def test_anonymous_upload(self, client, jpeg_bytes):
        response = upload(client, jpeg_bytes)

        assert response.status_code == 201
        photo = response.json()["photo"]
        assert photo["userId"] is None
        assert photo["originalFilename"] == "photo.jpg"
        assert photo["url"].startswith("/uploads/photos/")
        assert photo["exifData"]["make"] == "Canon"
        assert photo["isHidden"] is False

    def test_files_written(self, client, db_session, jpeg_bytes):
        photo_id = upload(client, jpeg_bytes).json()["photo"]["id"]

        photo = db_session.query(Photo).filter(Photo.id == photo_id).first()
        assert os.path.exists(photo.file_path)
        assert os.path.exists(photo.analysis_path)
        assert photo.file_path.startswith(settings.upload_dir)

    def test_owner_recorded(self, client, make_user, jpeg_bytes):
        user, headers = make_user()
        response = upload(client, jpeg_bytes, headers)
        assert response.json()["photo"]["userId"] == user.id

    def test_rejects_bad_extension(self, client, jpeg_bytes):
        response = upload(client, jpeg_bytes, filename="photo.txt")
        assert response.status_code == 400

    def test_rejects_non_image_content(self, client):
        response = upload(client, b"<html>definitely not a jpeg</html>")
        assert response.status_code == 400

    def test_rejects_oversized_file(self, client, monkeypatch, jpeg_bytes):
        monkeypatch.setattr(settings, "max_upload_size", 100)
        response = upload(client, jpeg_bytes)
        assert response.status_code == 413


class TestPhotoAccessAPI:

    @pytest.fixture
    def owned_photo(self, client, make_user, jpeg_bytes):
        user, headers = make_user("owner")
        photo = upload(client, jpeg_bytes, headers).json()["photo"]
        return user, headers, photo

    def test_get_photo(self, client, owned_photo):
        _, _, photo = owned_photo
        response = client.get(f"/api/v1/photos/{photo['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == photo["id"]

    def test_missing_photo(self, client):
        assert client.get("/api/v1/photos/does-not-exist").status_code == 404

    def test_hide_photo(self, client, owned_photo):
        _, headers, photo = owned_photo

        response = client.patch(f"/api/v1/photos/{photo['id']}", json={"isHidden": True}, headers=headers)
        assert response.status_code == 200
        assert response.json()["isHidden"] is True

        # 숨긴 사진은 다른 사람에게 보이지 않음
        assert client.get(f"/api/v1/photos/{photo['id']}").status_code == 404
        assert client.get(f"/api/v1/photos/{photo['id']}", headers=headers).status_code == 200

    def test_only_owner_can_hide(self, client, make_user, owned_photo):
        _, _, photo = owned_photo
        _, other_headers = make_user("other")
        response = client.patch(f"/api/v1/photos/{photo['id']}", json={"isHidden": True}, headers=other_headers)
        assert response.status_code == 403

    def test_list_photos(self, client, make_user, owned_photo, jpeg_bytes):
        user, headers, photo = owned_photo
        hidden = upload(client, jpeg_bytes, headers).json()["photo"]
        client.patch(f"/api/v1/photos/{hidden['id']}", json={"isHidden": True}, headers=headers)

        mine = client.get("/api/v1/photos", params={"include_hidden": True}, headers=headers).json()
        assert mine["total"] == 2

        public = client.get("/api/v1/photos", params={"user_id": user.id, "include_hidden": True}).json()
        assert public["total"] == 1
        assert public["photos"][0]["id"] == photo["id"]

    def test_list_requires_target(self, client):
        assert client.get("/api/v1/photos").status_code == 401

    def test_delete_photo_cascades(self, client, db_session, owned_photo):
        user, headers, photo = owned_photo
        analysis = add_analysis(db_session, photo["id"], user.id)
        analysis_id = analysis.id

        response = client.delete(f"/api/v1/photos/{photo['id']}", headers=headers)
        assert response.status_code == 204

        assert client.get(f"/api/v1/photos/{photo['id']}").status_code == 404
        assert client.get(f"/api/v1/analyses/{analysis_id}").status_code == 404

    def test_only_owner_can_delete(self, client, make_user, owned_photo):
        _, _, photo = owned_photo
        _, other_headers = make_user("other")
        assert client.delete(f"/api/v1/photos/{photo['id']}", headers=other_headers).status_code == 403

    def test_latest_analysis(self, client, db_session, owned_photo):
        user, _, photo = owned_photo
        now = datetime.now(timezone.utc)
        add_analysis(db_session, photo["id"], user.id, score=60, created_at=now - timedelta(hours=1))
        latest = add_analysis(db_session, photo["id"], user.id, score=90, created_at=now)

        response = client.get(f"/api/v1/photos/{photo['id']}/latest-analysis")
        assert response.status_code == 200
        assert response.json()["id"] == latest.id
        assert response.json()["overallScore"] == 90

        analyses = client.get(f"/api/v1/photos/{photo['id']}/analyses").json()
        assert [a["overallScore"] for a in analyses] == [90, 60]

    def test_latest_analysis_missing(self, client, owned_photo):
        _, _, photo = owned_photo
        assert client.get(f"/api/v1/photos/{photo['id']}/latest-analysis").status_code == 404

    def test_by_camera(self, client, db_session, owned_photo):
        user, _, photo = owned_photo
        add_analysis(db_session, photo["id"], user.id, camera_model="EOS R5", camera_manufacturer="Canon")

        response = client.get("/api/v1/photos/by-camera/EOS R5")
        assert response.status_code == 200
        results = response.json()
        assert len(results) == 1
        assert results[0]["photo"]["id"] == photo["id"]
        assert results[0]["cameraManufacturer"] == "Canon"


class TestAnalysisAPI:

    @pytest.fixture
    def photo(self, client, jpeg_bytes):
        return upload(client, jpeg_bytes).json()["photo"]

    def test_create_analysis(self, client, patch_gemini, make_detection, make_critique, photo):
        fake = patch_gemini(make_detection(), make_critique())

        response = client.post("/api/v1/analyses", json={
            "photoId": photo["id"],
            "persona": "brutal-critic",
            "language": "en",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["photoId"] == photo["id"]
        assert data["persona"] == "brutal-critic"
        assert data["language"] == "en"
        assert data["overallScore"] == 82
        assert data["categoryScores"]["lighting"] == 88
        assert data["cameraModel"] == "EOS R5"
        assert data["cameraManufacturer"] == "Canon"
        assert data["detailLevel"] == "standard"
        assert len(fake.calls) == 2

        # 분석용 축소본(JPEG)이 모델에 전달됨
        assert fake.calls[0]["image_bytes"].startswith(b"\xff\xd8\xff")

        latest = client.get(f"/api/v1/photos/{photo['id']}/latest-analysis").json()
        assert latest["id"] == data["id"]

    def test_default_language(self, client, patch_gemini, make_detection, make_critique, photo):
        patch_gemini(make_detection(), make_critique())
        response = client.post("/api/v1/analyses", json={"photoId": photo["id"]})
        assert response.status_code == 201
        assert response.json()["language"] == settings.default_language
        assert response.json()["persona"] == "supportive-friend"

    def test_not_analyzable(self, client, db_session, patch_gemini, make_detection, photo):
        fake = patch_gemini(make_detection(isRealPhoto=False))

        response = client.post("/api/v1/analyses", json={"photoId": photo["id"], "persona": "film-bro"})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert "message" in detail
        assert detail["detection"]["isRealPhoto"] is False
        assert len(fake.calls) == 1
        assert db_session.query(Analysis).count() == 0

    def test_model_failure(self, client, patch_gemini, make_detection, photo):
        patch_gemini(make_detection(), RuntimeError("upstream 500"))
        response = client.post("/api/v1/analyses", json={"photoId": photo["id"]})
        assert response.status_code == 502

    def test_bad_reply(self, client, patch_gemini, make_detection, photo):
        patch_gemini(make_detection(), "I think this photo is nice")
        response = client.post("/api/v1/analyses", json={"photoId": photo["id"]})
        assert response.status_code == 502

    def test_classification_failure(self, client, patch_gemini, photo):
        patch_gemini("not json")
        response = client.post("/api/v1/analyses", json={"photoId": photo["id"]})
        assert response.status_code == 502

    def test_missing_photo(self, client, patch_gemini):
        fake = patch_gemini()
        response = client.post("/api/v1/analyses", json={"photoId": "nope"})
        assert response.status_code == 404
        assert fake.calls == []

    def test_get_analysis(self, client, db_session, photo):
        analysis = add_analysis(db_session, photo["id"])
        response = client.get(f"/api/v1/analyses/{analysis.id}")
        assert response.status_code == 200
        assert response.json()["analysis"]["id"] == analysis.id
        assert response.json()["opinion"] is None

    def test_delete_analysis(self, client, db_session, make_user, photo):
        user, headers = make_user("author")
        _, other_headers = make_user("other")
        analysis = add_analysis(db_session, photo["id"], user.id)

        assert client.delete(f"/api/v1/analyses/{analysis.id}", headers=other_headers).status_code == 403
        assert client.delete(f"/api/v1/analyses/{analysis.id}", headers=headers).status_code == 204
        assert client.get(f"/api/v1/analyses/{analysis.id}").status_code == 404


class TestAnalysisVisibilityAPI:

    @pytest.fixture
    def owned_analysis(self, client, db_session, make_user, jpeg_bytes):
        user, headers = make_user("author")
        photo = upload(client, jpeg_bytes, headers).json()["photo"]
        analysis = add_analysis(db_session, photo["id"], user.id, score=40)
        return user, headers, photo, analysis

    def test_hide_analysis(self, client, make_user, owned_analysis):
        _, headers, photo, analysis = owned_analysis
        _, other_headers = make_user("other")

        response = client.patch(f"/api/v1/analyses/{analysis.id}/visibility", json={"isHidden": True}, headers=headers)
        assert response.status_code == 200
        assert response.json()["isHidden"] is True

        # 다른 사람과 비로그인 사용자에게는 보이지 않음
        assert client.get(f"/api/v1/analyses/{analysis.id}").status_code == 404
        assert client.get(f"/api/v1/analyses/{analysis.id}", headers=other_headers).status_code == 404
        assert client.get(f"/api/v1/photos/{photo['id']}/analyses", headers=other_headers).json() == []
        assert client.get(f"/api/v1/photos/{photo['id']}/latest-analysis").status_code == 404

        # 본인에게는 보임
        assert client.get(f"/api/v1/analyses/{analysis.id}", headers=headers).status_code == 200
        assert len(client.get(f"/api/v1/photos/{photo['id']}/analyses", headers=headers).json()) == 1

    def test_hidden_analysis_leaves_profile_average(self, client, db_session, owned_analysis):
        user, headers, photo, analysis = owned_analysis
        add_analysis(db_session, photo["id"], user.id, score=90)

        before = client.get(f"/api/v1/users/{user.id}").json()
        assert before["analysisCount"] == 2
        assert before["averageScore"] == 65.0

        client.patch(f"/api/v1/analyses/{analysis.id}/visibility", json={"isHidden": True}, headers=headers)

        after = client.get(f"/api/v1/users/{user.id}").json()
        assert after["analysisCount"] == 1
        assert after["averageScore"] == 90.0

    def test_unhide_analysis(self, client, owned_analysis):
        _, headers, _, analysis = owned_analysis
        client.patch(f"/api/v1/analyses/{analysis.id}/visibility", json={"isHidden": True}, headers=headers)

        response = client.patch(f"/api/v1/analyses/{analysis.id}/visibility", json={"isHidden": False}, headers=headers)
        assert response.json()["isHidden"] is False
        assert client.get(f"/api/v1/analyses/{analysis.id}").status_code == 200

    def test_only_owner_can_hide(self, client, make_user, owned_analysis):
        _, _, _, analysis = owned_analysis
        _, other_headers = make_user("other")
        response = client.patch(f"/api/v1/analyses/{analysis.id}/visibility", json={"isHidden": True}, headers=other_headers)
        assert response.status_code == 403

    def test_requires_login(self, client, owned_analysis):
        _, _, _, analysis = owned_analysis
        response = client.patch(f"/api/v1/analyses/{analysis.id}/visibility", json={"isHidden": True})
        assert response.status_code in (401, 403)

    def test_missing_analysis(self, client, make_user):
        _, headers = make_user()
        response = client.patch("/api/v1/analyses/nope/visibility", json={"isHidden": True}, headers=headers)
        assert response.status_code == 404

    def test_photo_owner_controls_anonymous_analysis(self, client, db_session, make_user, jpeg_bytes):
        _, owner_headers = make_user("owner")
        _, other_headers = make_user("other")
        photo = upload(client, jpeg_bytes, owner_headers).json()["photo"]
        analysis = add_analysis(db_session, photo["id"])

        assert client.patch(f"/api/v1/analyses/{analysis.id}/visibility", json={"isHidden": True}, headers=other_headers).status_code == 403
        assert client.patch(f"/api/v1/analyses/{analysis.id}/visibility", json={"isHidden": True}, headers=owner_headers).status_code == 200

        # 목록과 상세가 같은 주인 규칙을 따름
        listed = client.get(f"/api/v1/photos/{photo['id']}/analyses", headers=owner_headers).json()
        assert [a["id"] for a in listed] == [analysis.id]
        assert client.get(f"/api/v1/analyses/{analysis.id}", headers=owner_headers).status_code == 200
        assert client.get(f"/api/v1/analyses/{analysis.id}", headers=other_headers).status_code == 404


class TestOpinionAPI:

    def test_upsert_opinion(self, client, db_session, make_user, jpeg_bytes):
        user, headers = make_user()
        photo = upload(client, jpeg_bytes).json()["photo"]
        analysis = add_analysis(db_session, photo["id"])

        first = client.post(
            f"/api/v1/analyses/{analysis.id}/opinions",
            json={"isLiked": True, "comment": "spot on"},
            headers=headers,
        )
        assert first.status_code == 200
        assert first.json()["isLiked"] is True

        second = client.post(
            f"/api/v1/analyses/{analysis.id}/opinions",
            json={"isLiked": False, "comment": "changed my mind"},
            headers=headers,
        )
        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]

        assert db_session.query(Opinion).count() == 1

        detail = client.get(f"/api/v1/analyses/{analysis.id}", headers=headers).json()
        assert detail["opinion"]["comment"] == "changed my mind"
        assert detail["opinion"]["isLiked"] is False

    def test_requires_login(self, client, db_session, jpeg_bytes):
        photo = upload(client, jpeg_bytes).json()["photo"]
        analysis = add_analysis(db_session, photo["id"])
        response = client.post(f"/api/v1/analyses/{analysis.id}/opinions", json={"isLiked": True})
        assert response.status_code in (401, 403)

    def test_comment_too_long(self, client, db_session, make_user, jpeg_bytes):
        _, headers = make_user()
        photo = upload(client, jpeg_bytes).json()["photo"]
        analysis = add_analysis(db_session, photo["id"])
        response = client.post(
            f"/api/v1/analyses/{analysis.id}/opinions",
            json={"comment": "x" * 1001},
            headers=headers,
        )
        assert response.status_code == 422


class TestUsersAPI:

    def test_me(self, client, make_user):
        user, headers = make_user()
        response = client.get("/api/v1/users/me", headers=headers)
        assert response.status_code == 200
        assert response.json()["email"] == user.email

        assert client.get("/api/v1/auth/me", headers=headers).json()["id"] == user.id

    def test_invalid_token(self, client):
        response = client.get("/api/v1/users/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_update_profile(self, client, make_user):
        _, headers = make_user()
        response = client.patch("/api/v1/users/me", json={"bio": "street shooter", "websiteUrl1": "https://example.com"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["bio"] == "street shooter"
        assert response.json()["websiteUrl1"] == "https://example.com"
        assert response.json()["displayName"] == "tester"

    def test_public_profile(self, client, db_session, make_user, jpeg_bytes):
        user, _ = make_user()
        photo = upload(client, jpeg_bytes).json()["photo"]
        add_analysis(db_session, photo["id"], user.id, score=80)
        add_analysis(db_session, photo["id"], user.id, score=90)
        add_analysis(db_session, photo["id"], user.id, score=10, is_hidden=True)

        response = client.get(f"/api/v1/users/{user.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["analysisCount"] == 2
        assert data["averageScore"] == 85.0
        assert "email" not in data

    def test_unknown_user(self, client):
        assert client.get("/api/v1/users/nobody").status_code == 404
