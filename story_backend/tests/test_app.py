import json

import httpx
import openai
import pytest
from fastapi.testclient import TestClient

from story_backend.app.main import SOURCE_HEADER, create_app
from story_backend.libs.settings import Settings
from story_backend.orchestrator import FALLBACK_STORIES

PNG = b"\x89PNG\r\n\x1a\nfake-image-bytes"
STORIES = [{"summary": "Hero banner", "description": "Top of page", "priority": "High"}]


def _upload(field="image"):
    return {field: ("design.png", PNG, "image/png")}


def _api(fake_client, reply=None, error=None, **settings):
    client = fake_client(reply=reply, error=error)
    app = create_app(Settings(**settings), client=client)
    return TestClient(app), client


def _status_error(code, text):
    request = httpx.Request("POST", "https://api.x.ai/v1/chat/completions")
    return openai.APIStatusError(text, response=httpx.Response(code, text=text, request=request), body=None)


def test_health_and_root(fake_client):
    api, _ = _api(fake_client)
    assert api.get("/health").json() == {"status": "ok"}
    assert "POST /generate-stories" in api.get("/").json()["endpoints"]


def test_missing_image_is_400(fake_client):
    api, client = _api(fake_client, xai_api_key="k")
    resp = api.post("/generate-stories")
    assert resp.status_code == 400
    assert resp.json() == {"error": "No image uploaded."}
    assert client.chat.completions.calls == []


def test_wrong_field_name_is_400(fake_client):
    api, _ = _api(fake_client, xai_api_key="k")
    resp = api.post("/generate-stories", files=_upload(field="file"))
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_model_stories_are_returned(fake_client):
    api, client = _api(fake_client, reply="```json\n" + json.dumps(STORIES) + "\n```", xai_api_key="k")
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == 200
    assert resp.json() == STORIES
    assert resp.headers[SOURCE_HEADER] == "model"
    url = client.chat.completions.calls[0]["messages"][1]["content"][1]["image_url"]["url"]
    assert url.startswith("data:image/png;base64,")


def test_unparseable_reply_gives_fallback(fake_client):
    api, _ = _api(fake_client, reply="I see a login page.", xai_api_key="k")
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == 200
    assert resp.json() == FALLBACK_STORIES
    assert resp.headers[SOURCE_HEADER] == "fallback"


def test_missing_key_gives_fallback_by_default(fake_client):
    api, client = _api(fake_client, reply="[]")
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == 200
    assert resp.json() == FALLBACK_STORIES
    assert client.chat.completions.calls == []


def test_missing_key_is_500_when_strict(fake_client):
    api, _ = _api(fake_client, failure_policy="strict")
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == 500
    assert resp.json() == {"error": "API key not configured."}


def test_upstream_status_gives_fallback_by_default(fake_client):
    api, _ = _api(fake_client, error=_status_error(401, "invalid key"), xai_api_key="k")
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == 200
    assert resp.json() == FALLBACK_STORIES


def test_upstream_status_passes_through_when_strict(fake_client):
    api, _ = _api(fake_client, error=_status_error(429, "rate limited"), xai_api_key="k", failure_policy="strict")
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == 429
    assert resp.json() == {"error": "rate limited"}


@pytest.mark.parametrize("policy,status", [("fallback", 200), ("strict", 500)])
def test_unexpected_error_follows_policy(fake_client, policy, status):
    api, _ = _api(fake_client, error=RuntimeError("boom"), xai_api_key="k", failure_policy=policy)
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == status
    if status == 200:
        assert resp.json() == FALLBACK_STORIES
    else:
        assert resp.json() == {"error": "boom"}


def test_cors_allows_configured_origin(fake_client):
    api, _ = _api(fake_client, cors_origins=("http://localhost:5173",))
    resp = api.options(
        "/generate-stories",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )
    assert resp.headers.get("access-control-allow-origin") == "http://localhost:5173"


def test_non_finite_numbers_in_reply_give_fallback(fake_client):
    reply = '[{"summary":"A","storyPoints":{"junior":NaN,"midLevel":2,"senior":1}}]'
    api, _ = _api(fake_client, reply=reply, xai_api_key="k")
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == 200
    assert resp.json() == FALLBACK_STORIES
    assert resp.headers[SOURCE_HEADER] == "fallback"


def test_unparseable_reply_gives_fallback_when_strict(fake_client):
    api, _ = _api(fake_client, reply="I see a login page.", xai_api_key="k", failure_policy="strict")
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == 200
    assert resp.json() == FALLBACK_STORIES
    assert resp.headers[SOURCE_HEADER] == "fallback"


def test_empty_reply_gives_fallback_when_strict(fake_client):
    api, _ = _api(fake_client, reply="", xai_api_key="k", failure_policy="strict")
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == 200
    assert resp.json() == FALLBACK_STORIES


def test_deeply_nested_reply_gives_fallback_when_strict(fake_client):
    api, _ = _api(fake_client, reply="[" * 100000 + "]" * 100000, xai_api_key="k", failure_policy="strict")
    resp = api.post("/generate-stories", files=_upload())
    assert resp.status_code == 200
    assert resp.json() == FALLBACK_STORIES


def test_importing_the_app_module_has_no_side_effects(monkeypatch):
    import importlib

    import story_backend.app.main as main_module

    monkeypatch.setenv("STORY_FAILURE_POLICY", "sometimes")
    reloaded = importlib.reload(main_module)
    assert not hasattr(reloaded, "app")
    with pytest.raises(ValueError):
        reloaded.create_app()
