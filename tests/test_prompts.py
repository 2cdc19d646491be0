import json

from carpilot.prompts import (
    CAR_SYSTEM,
    build_car_planner_input,
    extract_json_object,
)
from carpilot.telemetry import Telemetry


def test_planner_input_contains_goal_and_snapshot():
    telemetry = Telemetry()
    telemetry.feed("S:011,42.0\n")
    text = build_car_planner_input("Go", telemetry)
    assert text.startswith("User goal:\nGo\n\n")
    assert '{"left":true,"center":false,"right":false,"distanceCm":42.0}\n' in text
    assert text.endswith("- Prefer short plans (<= 8 steps) so we can replan often.\n")


def test_planner_input_snapshot_is_json():
    telemetry = Telemetry()
    telemetry.feed("S:101,19.7\n")
    text = build_car_planner_input("drive", telemetry)
    line = text.split("Current sensor snapshot (obstaclePresent booleans):\n")[1].split("\n")[0]
    snapshot = json.loads(line)
    assert snapshot == {"left": False, "center": True, "right": False, "distanceCm": 19.7}


def test_planner_input_unknown_distance_is_null():
    text = build_car_planner_input("wait", Telemetry())
    assert '"distanceCm":null}' in text


def test_extract_json_object_strips_commentary():
    assert extract_json_object('  Sure! {"sequence":[]} hope this helps ') == '{"sequence":[]}'


def test_extract_json_object_keeps_nested_braces():
    raw = 'x {"a":{"b":1}} y'
    assert json.loads(extract_json_object(raw)) == {"a": {"b": 1}}


def test_extract_json_object_without_object_returns_trimmed_text():
    assert extract_json_object("  no json here \n") == "no json here"
    assert extract_json_object("} {") == "} {"


def test_car_prompt_fallback_plan_is_extractable():
    fallback = CAR_SYSTEM.split("8) If ambiguous or unsafe: output ")[1].split("\n")[0]
    assert json.loads(extract_json_object(fallback)) == {"sequence": [{"action": "stop"}]}