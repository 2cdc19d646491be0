"""HTTP endpoints: manual driving, planning, plan execution, chat, weather, files."""

from __future__ import annotations

import json
from typing import Any

from flask import Flask, Response, request

from .prompts import (
    CAR_SYSTEM,
    CHAT_SYSTEM,
    WEATHER_SYSTEM,
    build_car_planner_input,
    extract_json_object,
)

_MANUAL_COMMANDS = {
    "forward": b"F\n",
    "backward": b"B\n",
    "left": b"L\n",
    "right": b"R\n",
    "stop": b"S\n",
}
_WEATHER_PROMPT = "Extract ONLY the city name from this user input. Return only the city name:\n"
_INVALID = object()


def _json(payload: Any, status: int = 200) -> Response:
    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return Response(body, status=status, mimetype="application/json")


def _error(message: str, status: int = 400) -> Response:
    return _json({"error": message}, status)


def _text(body: str, status: int = 200) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def _request_body() -> str:
    """The raw request body, or the first request argument when it is empty."""
    body = request.get_data(as_text=True)
    if body:
        return body
    return next(iter(request.values.values()), "")


def _parse(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return _INVALID


def _string_field(doc: Any, key: str) -> str:
    value = doc.get(key) if isinstance(doc, dict) else None
    return value if isinstance(value, str) else ""


def create_app(executor, telemetry, openai, weather, static_files) -> Flask:
    """Build the web application around the car, its sensors and remote services."""
    app = Flask(__name__)

    @app.get("/ping")
    def ping() -> Response:
        return _text("pong")

    @app.get("/favicon.ico")
    def favicon() -> Response:
        return Response(status=204)

    @app.get("/status")
    def status() -> Response:
        return _text(telemetry.status_text())

    @app.post("/stopAll")
    def stop_all() -> Response:
        executor.stop()
        return _json({"ok": True})

    @app.post("/car")
    def car() -> Response:
        raw = _request_body()
        if not raw:
            return _error("Empty body")
        doc = _parse(raw)
        if doc is _INVALID:
            return _error("Invalid JSON")
        command = _string_field(doc, "command").lower()
        wire = _MANUAL_COMMANDS.get(command)
        if wire is None:
            return _error("Unknown command")
        # Manual driving goes straight to the car, without a timed burst.
        executor.port.write(wire)
        return _json({"ok": True, "command": command})

    @app.post("/carPlan")
    def car_plan() -> Response:
        raw = _request_body()
        if not raw:
            return _error("Empty body")
        doc = _parse(raw)
        if doc is _INVALID:
            return _error("Invalid JSON")
        message = _string_field(doc, "message")
        if not message:
            return _error("Empty message")

        plan_text = openai.send(CAR_SYSTEM, build_car_planner_input(message, telemetry))
        if not plan_text:
            return _error("OpenAI failed", 500)

        plan_text = extract_json_object(plan_text)
        plan = _parse(plan_text)
        if not isinstance(plan, dict) or plan.get("sequence") is None:
            return _error("Planner returned invalid plan", 500)
        return Response(plan_text, status=200, mimetype="application/json")

    @app.post("/carExec")
    def car_exec() -> Response:
        body = _request_body()
        if not body:
            return _error("Empty body")
        return _json(executor.execute_plan_json(body))

    @app.post("/chat")
    def chat() -> Response:
        doc = _parse(_request_body())
        if doc is _INVALID:
            return _error("Invalid JSON")
        message = _string_field(doc, "message")
        if not message:
            return _error("Empty message")
        return _json({"response": openai.send(CHAT_SYSTEM, message)})

    @app.post("/getWeather")
    def get_weather() -> Response:
        doc = _parse(_request_body())
        if doc is _INVALID:
            return _error("Invalid JSON")
        message = _string_field(doc, "message")
        if not message:
            return _error("Empty message")

        city = openai.send(WEATHER_SYSTEM, _WEATHER_PROMPT + message).strip()
        if not city:
            return _json({"response": "Could not detect city"})
        city = city.replace(" ", "%20")
        return _json({"response": weather.get_weather_data(city)})

    def _serve(path: str) -> Response | None:
        found = static_files.read(path, "download" in request.values)
        if found is None:
            return None
        body, mime = found
        return Response(body, status=200, mimetype=mime)

    @app.get("/")
    def index() -> Response:
        return _serve("/index.html") or _text("Missing /index.html", 404)

    def not_found(_error_obj) -> Response:
        return _serve(request.path) or _text(f"FileNotFound: {request.path}", 404)

    app.register_error_handler(404, not_found)
    app.register_error_handler(405, not_found)
    return app