#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_settings.py
----------------------------------------------------------------------
JSON settings file for Dialtone.

Holds output wiring and window size only:

    {
        "backend": "supriya",      // "supriya" | "osc" | "midi"
        "osc_host": "127.0.0.1",
        "osc_port": 57110,
        "midi_port": null,         // null = first available output
        "amp": 0.2,
        "window_width": 1000,
        "window_height": 640
    }

Unknown keys are ignored so older/newer files still load.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional


BACKENDS = ("supriya", "osc", "midi")


class SettingsError(ValueError):
    """Settings file exists but cannot be used."""


@dataclass
class AppSettings:
    backend: str = "supriya"
    osc_host: str = "127.0.0.1"
    osc_port: int = 57110
    midi_port: Optional[str] = None
    amp: float = 0.2
    window_width: int = 1000
    window_height: int = 640

    def validate(self) -> "AppSettings":
        if self.backend not in BACKENDS:
            raise SettingsError(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if not 0 < int(self.osc_port) < 65536:
            raise SettingsError(f"osc_port out of range: {self.osc_port}")
        if not 0.0 <= float(self.amp) <= 1.0:
            raise SettingsError(f"amp must be within 0..1, got {self.amp}")
        if int(self.window_width) <= 0 or int(self.window_height) <= 0:
            raise SettingsError("window size must be positive")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppSettings":
        if not isinstance(data, dict):
            raise SettingsError("settings file must contain a JSON object")
        known = {f.name for f in fields(cls)}
        try:
            settings = cls(**{k: v for k, v in data.items() if k in known})
            settings.osc_port = int(settings.osc_port)
            settings.amp = float(settings.amp)
            settings.window_width = int(settings.window_width)
            settings.window_height = int(settings.window_height)
        except (TypeError, ValueError) as exc:
            raise SettingsError(f"invalid settings value: {exc}") from exc
        return settings.validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_settings(path: Optional[str]) -> AppSettings:
    """
    Read settings from ``path``.

    A missing path (None or no such file) gives the defaults; a file that
    exists but is not valid raises SettingsError.
    """
    if not path or not os.path.exists(path):
        return AppSettings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SettingsError(f"{path}: {exc}") from exc
    return AppSettings.from_dict(data)


def save_settings(path: str, settings: AppSettings) -> None:
    settings.validate()
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings.to_dict(), f, indent=4)


__all__ = ["AppSettings", "BACKENDS", "SettingsError", "load_settings", "save_settings"]
