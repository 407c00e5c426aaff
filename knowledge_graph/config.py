"""knowledge_graph.config

View settings persisted as a compact JSON payload in QSettings.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from typing import Optional

from PySide6.QtCore import QSettings

LOG = logging.getLogger("knowledge_graph.config")

ORGANIZATION = "Portfolio"
APP_NAME = "KnowledgeGraph"
SETTINGS_KEY = "View/state"


@dataclass
class ViewSettings:
    frame_interval_ms: int = 16
    show_particles: bool = True
    catalog_path: str = ""
    log_level: str = "INFO"


def _settings() -> QSettings:
    return QSettings(ORGANIZATION, APP_NAME)


def load_settings(store: Optional[QSettings] = None) -> ViewSettings:
    s = store or _settings()
    try:
        raw = s.value(SETTINGS_KEY, "{}", type=str)
        data = json.loads(raw or "{}")
    except Exception as e:
        LOG.warning("Load settings failed: %s", e)
        return ViewSettings()
    if not isinstance(data, dict):
        LOG.warning("Ignoring settings payload of type %s", type(data).__name__)
        return ViewSettings()

    defaults = ViewSettings()
    values = {}
    for f in fields(ViewSettings):
        if f.name not in data:
            continue
        default = getattr(defaults, f.name)
        try:
            if isinstance(default, bool):
                values[f.name] = bool(data[f.name])
            else:
                values[f.name] = type(default)(data[f.name])
        except (TypeError, ValueError):
            LOG.warning("Invalid value for %s: %r", f.name, data[f.name])
    settings = ViewSettings(**values)
    if settings.frame_interval_ms < 1:
        LOG.warning("frame_interval_ms must be positive, using %d", defaults.frame_interval_ms)
        settings.frame_interval_ms = defaults.frame_interval_ms
    return settings


def save_settings(settings: ViewSettings, store: Optional[QSettings] = None) -> None:
    s = store or _settings()
    s.setValue(SETTINGS_KEY, json.dumps(asdict(settings)))
