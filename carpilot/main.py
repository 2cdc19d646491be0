"""Command-line entry point: connect to the car and serve the web interface."""

from __future__ import annotations

import argparse
import logging
import os
import threading
from collections.abc import Mapping
from dataclasses import dataclass

import serial

from .car_executor import CarExecutor
from .fs_web import StaticFiles
from .openai_client import OpenAIClient
from .routes import create_app
from .telemetry import Telemetry
from .weather_client import WeatherClient

OPENAI_KEY_VAR = "OPENAI_API_KEY"
OPENWEATHER_KEY_VAR = "OPENWEATHER_API_KEY"
DEFAULT_BAUD = 9600
SERIAL_TIMEOUT_S = 0.01
_PUMP_INTERVAL_S = 0.01

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Secrets:
    """API keys for the language-model and weather services."""

    openai: str = ""
    openweather: str = ""


def load_secrets(environ: Mapping[str, str] | None = None) -> Secrets:
    """Read the API keys from the environment; missing keys are empty."""
    env = os.environ if environ is None else environ
    return Secrets(
        openai=env.get(OPENAI_KEY_VAR, ""),
        openweather=env.get(OPENWEATHER_KEY_VAR, ""),
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="carpilot", description="Web and language-model control for a small car."
    )
    parser.add_argument("--serial", default="/dev/ttyUSB0", help="serial device of the car")
    parser.add_argument("--baud", type=int, default=DEFAULT_BAUD, help="serial baud rate")
    parser.add_argument("--web-root", default="data", help="directory of static web files")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--http-port", type=int, default=80, help="HTTP port")
    return parser.parse_args(argv)


def _pump_forever(telemetry: Telemetry, port, stop: threading.Event) -> None:
    while not stop.wait(_PUMP_INTERVAL_S):
        try:
            telemetry.pump(port)
        except serial.SerialException as exc:
            log.warning("telemetry read failed: %s", exc)


def main(argv: list[str] | None = None) -> int:
    """Run the car controller until the web server stops."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    secrets = load_secrets()

    try:
        port = serial.Serial(args.serial, args.baud, timeout=SERIAL_TIMEOUT_S)
    except serial.SerialException as exc:
        log.error("cannot open %s: %s", args.serial, exc)
        return 1

    try:
        static_files = StaticFiles(args.web_root)
        if static_files.root.is_dir():
            log.info("Files in %s:", static_files.root)
            for name in static_files.list_files():
                log.info("  %s", name)
        else:
            log.warning("web root %s not found", static_files.root)

        telemetry = Telemetry()
        app = create_app(
            CarExecutor(port, telemetry),
            telemetry,
            OpenAIClient(secrets.openai),
            WeatherClient(secrets.openweather),
            static_files,
        )

        stop = threading.Event()
        pump = threading.Thread(
            target=_pump_forever, args=(telemetry, port, stop), daemon=True
        )
        pump.start()
        try:
            app.run(host=args.host, port=args.http_port, threaded=True)
        finally:
            stop.set()
            pump.join()
    finally:
        port.close()
    return 0