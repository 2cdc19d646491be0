import json

import requests
import responses

from carpilot.openai_client import DEFAULT_URL, OpenAIClient


def reply(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_build_payload():
    client = OpenAIClient("token")
    payload = client.build_payload("sys", "hi")
    assert payload == {
        "model": "gpt-4o-mini",
        "temperature": 0.2,
        "messages": [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "hi"},
        ],
    }


def test_send_returns_content_and_sends_request():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, DEFAULT_URL, json=reply("hello there"))
        client = OpenAIClient("token")
        assert client.send("sys", "hi") == "hello there"
        request = rsps.calls[0].request
        assert request.headers["Authorization"] == "Bearer token"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.body) == client.build_payload("sys", "hi")


def test_error_status_without_choices_gives_empty():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST, DEFAULT_URL, json={"error": {"message": "bad key"}}, status=401
        )
        assert OpenAIClient("token").send("sys", "hi") == ""


def test_connection_error_gives_empty():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, DEFAULT_URL, body=requests.ConnectionError("down"))
        assert OpenAIClient("token").send("sys", "hi") == ""


def test_non_json_body_gives_empty():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, DEFAULT_URL, body="<html>oops</html>")
        assert OpenAIClient("token").send("sys", "hi") == ""


def test_non_string_content_gives_empty():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, DEFAULT_URL, json=reply(None))
        rsps.add(responses.POST, DEFAULT_URL, json={"choices": []})
        client = OpenAIClient("token")
        assert client.send("sys", "hi") == ""
        assert client.send("sys", "hi") == ""


def test_custom_url_and_model():
    url = "http://localhost:9999/chat"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, url, json=reply("ok"))
        client = OpenAIClient("token", url=url, model="tiny", temperature=0.5)
        assert client.send("s", "u") == "ok"
        body = json.loads(rsps.calls[0].request.body)
        assert (body["model"], body["temperature"]) == ("tiny", 0.5)