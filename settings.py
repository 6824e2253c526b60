"""
Settings management
Loads and saves settings.json; environment variables override the API target
"""
import os
import json
from pathlib import Path
from dataclasses import dataclass, asdict, fields
from typing import Optional

from utils import get_base_path


@dataclass
class PosSettings:
    """POS screen settings (timings are in milliseconds)"""
    api_url: str = "http://localhost:5000/api"
    api_token: str = ""
    request_timeout: int = 15
    # Scanner heuristics
    scan_threshold_ms: int = 100
    idle_trigger_ms: int = 150
    min_execute_length: int = 2
    min_auto_length: int = 3
    min_unfocused_length: int = 4
    code_prefix: str = "FZ-"
    dedup_window_ms: int = 1000
    # Payment / UI
    poll_interval_ms: int = 3000
    toast_duration_ms: int = 3000
    max_toasts: int = 5
    search_debounce_ms: int = 300
    global_capture: bool = False


def get_settings_path() -> Path:
    """Path of the settings file"""
    return get_base_path() / "settings.json"


def load_settings(path: Optional[Path] = None) -> PosSettings:
    """
    Load settings from settings.json

    Unknown keys are ignored and missing keys keep their defaults.
    POS_API_URL and POS_API_TOKEN override the file.

    Args:
        path: settings file (defaults to settings.json beside the program)

    Returns:
        PosSettings
    """
    settings_path = path or get_settings_path()
    settings = PosSettings()

    if settings_path.exists():
        try:
            with open(settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            known = {f.name for f in fields(PosSettings)}
            for key, value in data.items():
                if key in known:
                    setattr(settings, key, value)
        except (OSError, ValueError) as e:
            print(f"Settings load error: {str(e)}")
            settings = PosSettings()

    env_url = os.environ.get("POS_API_URL")
    if env_url:
        settings.api_url = env_url
    env_token = os.environ.get("POS_API_TOKEN")
    if env_token:
        settings.api_token = env_token

    return settings


def save_settings(settings: PosSettings, path: Optional[Path] = None) -> bool:
    """
    Save settings to settings.json

    Args:
        settings: settings to write
        path: settings file (defaults to settings.json beside the program)

    Returns:
        True on success
    """
    settings_path = path or get_settings_path()
    try:
        with open(settings_path, 'w', encoding='utf-8') as f:
            json.dump(asdict(settings), f, ensure_ascii=False, indent=2)
        return True
    except OSError as e:
        print(f"Settings save error: {str(e)}")
        return False
