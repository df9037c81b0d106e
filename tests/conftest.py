import os
import tempfile

TEST_BOT_TOKEN = "123456:TEST-TOKEN"
MONITORED_CHAT_ID = -1001000
GUILD_CHAT_ID = -1002000

os.environ["TELEGRAM_BOT_TOKEN"] = TEST_BOT_TOKEN
os.environ["MONITORED_CHAT_ID"] = str(MONITORED_CHAT_ID)
os.environ["GUILD_CHAT_ID"] = str(GUILD_CHAT_ID)
os.environ["BACKEND_API_URL"] = "http://testserver"
os.environ["LOG_FILE"] = os.path.join(tempfile.gettempdir(), "clip-review-tests.log")
os.environ["STATE_FILE"] = os.path.join(tempfile.mkdtemp(), "state.json")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.config import AppSettings, TelegramSettings
from app.db.state_store import StateStore
from app.main import create_app
from app.services.video_registry import VideoRegistry


@pytest.fixture
def state_path(tmp_path):
    return tmp_path / "state.json"


@pytest.fixture
def registry(state_path):
    return VideoRegistry(StateStore(str(state_path)))


@pytest.fixture
def telegram_settings():
    return TelegramSettings(
        TELEGRAM_BOT_TOKEN=TEST_BOT_TOKEN,
        MONITORED_CHAT_ID=MONITORED_CHAT_ID,
        GUILD_CHAT_ID=GUILD_CHAT_ID,
        BAN_ENABLED=True,
    )


@pytest.fixture
def app(state_path, tmp_path):
    settings = AppSettings(STATE_FILE=str(state_path), log_file=str(tmp_path / "app.log"))
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def bot_headers():
    return {"X-Bot-Token": TEST_BOT_TOKEN}


def upload_payload(message_id, author_id=42, chat_id=MONITORED_CHAT_ID, **overrides):
    payload = {
        "chat_id": chat_id,
        "message_id": message_id,
        "author_id": author_id,
        "author_tag": f"@user{author_id}",
        "author_is_bot": False,
        "created_at": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc).isoformat(),
        "attachments": [
            {"content_type": "video/mp4", "file_id": f"file-{message_id}", "filename": f"clip{message_id}.mp4"},
        ],
    }
    payload.update(overrides)
    return payload


def reaction_payload(message_id, emoji, chat_id=MONITORED_CHAT_ID, **overrides):
    payload = {
        "chat_id": chat_id,
        "message_id": message_id,
        "emoji": emoji,
        "actor_is_bot": False,
    }
    payload.update(overrides)
    return payload


def register_videos(registry, count):
    for number in range(1, count + 1):
        registry.register(
            video_id=f"m{number}",
            url=f"/api/videos/m{number}/file",
            filename=f"clip{number}.mp4",
            uploaded_by=f"@user{number}",
            user_id=str(100 + number),
            timestamp=1_700_000_000_000 + number,
            file_id=f"file-m{number}",
        )
