"""Obstacle and distance telemetry reported by the car controller over serial."""

from __future__ import annotations

import math
import re
import threading

MAX_LINE_LENGTH = 200
_LINE_PREFIX = "S:"
_SENSORS = ("left", "center", "right")
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _to_float(text: str) -> float:
    """Parse the leading number of ``text``; 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group()) if match else 0.0


class Telemetry:
    """Latest sensor state, updated from lines such as ``S:101,19.7``.

    In the obstacle bits ``'1'`` means clear and ``'0'`` means an obstacle is
    present, in the order left, center, right.
    """

    def __init__(self) -> None:
        self.obstacle_data = ""
        self.distance_text = ""
        self.obstacle_left = False
        self.obstacle_center = False
        self.obstacle_right = False
        self.distance_cm = math.nan
        self._buffer = ""
        self._lock = threading.Lock()

    def feed(self, data: bytes | bytearray | str) -> None:
        """Consume raw serial data, updating state for every complete line."""
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("latin-1")
        with self._lock:
            for char in data:
                if char == "\n":
                    self._handle_line(self._buffer.strip())
                    self._buffer = ""
                elif char != "\r":
                    self._buffer += char
                    if len(self._buffer) > MAX_LINE_LENGTH:
                        self._buffer = ""

    def _handle_line(self, line: str) -> None:
        if not line.startswith(_LINE_PREFIX):
            return
        comma = line.find(",")
        if comma < 0:
            return
        bits = line[len(_LINE_PREFIX):comma].strip()
        distance = line[comma + 1:].strip()
        if len(bits) != 3:
            return
        self.obstacle_data = bits
        self.distance_text = distance
        self.obstacle_left = bits[0] == "0"
        self.obstacle_center = bits[1] == "0"
        self.obstacle_right = bits[2] == "0"
        self.distance_cm = _to_float(distance)

    def pump(self, port) -> None:
        """Read whatever a serial port has waiting and feed it in."""
        while port.in_waiting:
            self.feed(port.read(port.in_waiting))

    def obstacle_for_sensor(self, sensor: str) -> bool:
        """Whether the named sensor (left, center, right) sees an obstacle."""
        return {
            "left": self.obstacle_left,
            "center": self.obstacle_center,
            "right": self.obstacle_right,
        }.get(sensor, False)

    def status_text(self) -> str:
        """Raw obstacle bits and distance joined by a comma."""
        return f"{self.obstacle_data},{self.distance_text}"