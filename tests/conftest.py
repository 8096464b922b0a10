"""
Shared fixtures for mirror. tests

Settings are read from the environment at import time, so the test
environment is configured here before any mirror module is imported.
"""

import io
import json
import os
import tempfile

TEST_ROOT = tempfile.mkdtemp(prefix="mirror-test-")
os.environ["SECRET_KEY"] = "test-secret-key-for-mirror-api-0123456789"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEBUG"] = "false"
os.environ["GEMINI_API_KEY"] = ""
os.environ["UPLOAD_DIR"] = os.path.join(TEST_ROOT, "uploads")
os.environ["MIRROR_LOG_DIR"] = os.path.join(TEST_ROOT, "logs")

import pytest
from PIL import Image
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from mirror.database import Base, get_db
from mirror.models.user import User
from mirror.core.security import create_access_token
from mirror.services import ai_service


class FakeGemini:
    """Scripted stand-in for ai_service.generate

    Each call pops the next scripted reply. A reply that is an exception
    instance is raised instead of returned.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    async def __call__(self, prompt_parts, image_bytes, mime_type=None):
        self.calls.append({
            "prompt_parts": list(prompt_parts),
            "image_bytes": image_bytes,
            "mime_type": mime_type,
        })
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def _detection(**overrides):
    data = {
        "detectedGenre": "Landscape Photography",
        "confidence": 0.9,
        "isRealPhoto": True,
        "isFamousArtwork": False,
        "reasonForClassification": "A real landscape photo taken with a camera.",
        "properties": {
            "primaryGenre": "Landscape",
            "secondaryGenre": "Nature",
            "keywords": ["mountain", "lake", "sunrise"],
            "technicalAttributes": {
                "composition": "rule of thirds",
                "lighting": "golden hour",
                "color": "warm",
                "focus": "sharp throughout",
            },
        },
    }
    data.update(overrides)
    return data


def _critique(**overrides):
    data = {
        "detectedGenre": "Landscape Photography",
        "summary": "Calm lake glowing at sunrise",
        "overallScore": 82,
        "tags": ["landscape", "sunrise", "lake"],
        "categoryScores": {
            "composition": 85,
            "lighting": 88,
            "color": 80,
            "focus": 78,
            "creativity": 75,
        },
        "analysis": {
            "overall": {
                "text": "A well balanced landscape.",
                "strengths": ["Warm light", "Clean horizon"],
                "improvements": ["Foreground feels empty"],
                "modifications": "Lift the shadows slightly.",
            },
            "composition": {"text": "Horizon on the lower third.", "suggestions": "Add a foreground anchor."},
            "lighting": {"text": "Soft golden light.", "suggestions": ""},
            "color": {"text": "Warm palette.", "suggestions": ""},
            "focus": {"text": "Sharp.", "suggestions": ""},
            "creativity": {"text": "Classic framing.", "suggestions": "Try a lower angle."},
        },
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_detection():
    """Classifier JSON payload builder"""
    return _detection


@pytest.fixture
def make_critique():
    """Critique JSON payload builder"""
    return _critique


@pytest.fixture
def fake_gemini():
    """Build a FakeGemini from replies (dicts are JSON encoded)"""
    def build(*replies):
        return FakeGemini(*[
            json.dumps(r) if isinstance(r, dict) else r for r in replies
        ])
    return build


@pytest.fixture
def patch_gemini(monkeypatch, fake_gemini):
    """Replace ai_service.generate with a scripted fake and return it"""
    def install(*replies):
        fake = fake_gemini(*replies)
        monkeypatch.setattr(ai_service, "generate", fake)
        return fake
    return install


def _jpeg(size=(120, 80), make=None, model=None):
    img = Image.new("RGB", size, color="red")
    exif = Image.Exif()
    if make:
        exif[0x010F] = make
    if model:
        exif[0x0110] = model
    buf = io.BytesIO()
    img.save(buf, "JPEG", exif=exif)
    return buf.getvalue()


@pytest.fixture
def jpeg_bytes():
    """Small JPEG with camera EXIF"""
    return _jpeg(make="Canon", model="EOS R5")


@pytest.fixture
def make_jpeg():
    return _jpeg


@pytest.fixture
def engine():
    """In-memory SQLite shared across connections"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    """TestClient with get_db bound to the in-memory database"""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Create a user and return (user, auth headers)"""
    def create(name="tester"):
        user = User(
            google_id=f"google-{name}",
            email=f"{name}@example.com",
            display_name=name,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        token = create_access_token(data={"sub": user.email, "user_id": user.id})
        return user, {"Authorization": f"Bearer {token}"}
    return create
