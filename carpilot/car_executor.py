"""Runs motion plans on the car, one step at a time, with safety limits."""

from __future__ import annotations

import json
import time
from typing import Any, Callable

MAX_STEPS = 25
BURST_MS = 2000
MAX_DURATION_MS = 15000
DEFAULT_CONDITION_TIMEOUT_MS = 15000

_DRIVE_POLL_S = 0.01
_WAIT_POLL_S = 0.02
_LONG_RANGE = (-(2**31), 2**31 - 1)
_UINT32_RANGE = (0, 2**32 - 1)

_MOVES = frozenset({"forward", "backward", "left", "right"})
_COMMAND_BYTES = {
    "forward": b"F\n",
    "backward": b"B\n",
    "left": b"L\n",
    "right": b"R\n",
    "stop": b"S\n",
}
_SENSORS = frozenset({"left", "center", "right"})


class PlanError(Exception):
    """A plan was rejected or aborted; the message says why."""


def _get(node: Any, key: str) -> Any:
    return node.get(key) if isinstance(node, dict) else None


def _int_or(value: Any, default: int, bounds: tuple[int, int]) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        low, high = bounds
        if low <= value <= high:
            return value
    return default


class CarExecutor:
    """Sends motion commands to the car over a serial port and runs plans."""

    def __init__(
        self,
        port,
        telemetry,
        poll: Callable[[], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.port = port
        self.telemetry = telemetry
        self.motion = "stop"
        self._poll = poll or (lambda: None)
        self._clock = clock
        self._sleep = sleep

    def send_command(self, action: str) -> None:
        """Send a motion word; anything unrecognised stops the car."""
        self.motion = action if action in _MOVES else "stop"
        self.port.write(_COMMAND_BYTES[self.motion])

    def stop(self) -> None:
        """Emergency stop."""
        self.send_command("stop")

    def _elapsed_ms(self, start: float) -> float:
        return (self._clock() - start) * 1000.0

    def _abort(self, message: str) -> PlanError:
        self.stop()
        return PlanError(message)

    def _drive_for(self, duration_ms: float) -> None:
        start = self._clock()
        while self._elapsed_ms(start) < duration_ms:
            self._poll()
            if self.motion == "forward" and self.telemetry.obstacle_center:
                raise self._abort("Emergency stop: obstacle center")
            self._sleep(_DRIVE_POLL_S)

    def _wait_for(self, sensor: str, desired: bool, timeout_ms: int) -> bool:
        start = self._clock()
        while True:
            self._poll()
            if self.telemetry.obstacle_for_sensor(sensor) == desired:
                return True
            if timeout_ms > 0 and self._elapsed_ms(start) > timeout_ms:
                return False
            self._sleep(_WAIT_POLL_S)

    def _run_step(self, step: Any) -> None:
        action = _get(step, "action")
        if not isinstance(action, str):
            raise self._abort("Step missing action")
        action = action.lower()

        if action == "stop":
            self.stop()
            return

        if action in _MOVES:
            # Every move is a fixed burst so a forgotten wait cannot drive forever.
            self.send_command(action)
            self._drive_for(BURST_MS)
            self.stop()
            return

        parameters = _get(step, "parameters")

        if action == "durationwait":
            duration = _int_or(_get(parameters, "duration"), 0, _LONG_RANGE)
            self._drive_for(min(max(duration, 0), MAX_DURATION_MS))
            return

        if action == "conditionwait":
            condition = _get(parameters, "condition")
            sensor = _get(condition, "sensor")
            sensor = sensor.lower() if isinstance(sensor, str) else ""
            desired = _get(condition, "state")
            desired = desired if isinstance(desired, bool) else False
            timeout_ms = _int_or(
                _get(parameters, "timeoutMs"), DEFAULT_CONDITION_TIMEOUT_MS, _UINT32_RANGE
            )
            if sensor not in _SENSORS:
                raise self._abort("Invalid sensor in conditionWait")
            if not self._wait_for(sensor, desired, timeout_ms):
                raise self._abort("conditionWait timeout")
            return

        raise self._abort("Unknown action")

    def execute_plan(self, plan: Any) -> None:
        """Run a parsed ``{"sequence": [...]}`` plan; raise PlanError on failure."""
        sequence = _get(plan, "sequence")
        if not isinstance(sequence, list):
            raise PlanError("Missing sequence")
        if not sequence:
            raise PlanError("Empty sequence")
        if len(sequence) > MAX_STEPS:
            raise PlanError("Too many steps")
        for step in sequence:
            self._poll()
            self._run_step(step)

    def execute_plan_json(self, plan_json: str | bytes) -> dict[str, Any]:
        """Run a JSON plan and report ``{"ok": True}`` or ``{"ok": False, "error": ...}``."""
        try:
            plan = json.loads(plan_json)
        except ValueError:
            return {"ok": False, "error": "Plan JSON invalid"}
        try:
            self.execute_plan(plan)
        except PlanError as exc:
            return {"ok": False, "error": str(exc)}
        return {"ok": True}