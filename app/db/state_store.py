import json
import os
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from app.schemas.video import RegistrySnapshot


class StateStore:
    """JSON file holding the full registry snapshot.

    The file is read once at startup and rewritten whole after every
    mutation. Failures are logged and swallowed: the in-memory registry stays
    authoritative until the next successful write.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def load(self) -> Optional[RegistrySnapshot]:
        if not self.path.exists():
            logger.info(f"No state file at {self.path}, starting fresh")
            return None

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            snapshot = RegistrySnapshot.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Error loading state from {self.path}: {e}")
            return RegistrySnapshot()

        logger.info(f"State loaded: {len(snapshot.videos)} videos, cursor at {snapshot.cursor}")
        return snapshot

    def save(self, snapshot: RegistrySnapshot) -> bool:
        payload = snapshot.model_dump(by_alias=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Error saving state to {self.path}: {e}")
            return False

        logger.debug(f"State saved: {len(snapshot.videos)} videos")
        return True
