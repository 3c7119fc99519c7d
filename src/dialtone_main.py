#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_main.py
----------------------------------------------------------------------
Entry point for Dialtone: phone number -> melody -> piano roll.

    dialtone                           # supriya backend, boots scsynth
    dialtone --backend osc             # running scsynth on 127.0.0.1:57110
    dialtone --backend midi            # first MIDI output port
    dialtone --settings ~/dialtone.json --verbose
"""

import argparse
import logging
import sys

from PyQt6 import QtWidgets

from dialtone_audio import create_audio_backend
from dialtone_controller import DialtoneController
from dialtone_gui import DialtoneWindow
from dialtone_settings import BACKENDS, AppSettings, SettingsError, load_settings


logger = logging.getLogger("dialtone")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a phone number as a melody.")
    parser.add_argument("--settings", help="JSON settings file")
    parser.add_argument("--backend", choices=BACKENDS, help="override the audio backend")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> AppSettings:
    try:
        settings = load_settings(args.settings)
    except SettingsError as exc:
        logger.error("Ignoring settings file: %s", exc)
        settings = AppSettings()
    if args.backend:
        settings.backend = args.backend
    return settings


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    settings = resolve_settings(args)

    app = QtWidgets.QApplication(sys.argv[:1])

    with create_audio_backend(settings) as audio:
        controller = DialtoneController(audio)
        window = DialtoneWindow(controller)
        window.resize(settings.window_width, settings.window_height)
        window.show()
        return app.exec()


if __name__ == "__main__":
    sys.exit(main())
