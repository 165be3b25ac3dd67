"""WizardSession: guards, stale discovery responses and save payloads."""

import asyncio
import re

import httpx
import pytest

from clawsetup.schemas import SaveResponse
from clawsetup.wizard import ConfigSubmitter, ModelDiscoveryClient, WizardSession
from clawsetup.wizard.discovery import MSG_API_KEY_REQUIRED, ModelListResult
from clawsetup.wizard.submitter import MSG_SAVE_FAILED

HEX48 = re.compile(r"^[0-9a-f]{48}$")

SAVED = {"ok": True, "restarted": True, "message": "配置已保存"}


class GatedDiscovery:
    """Discovery stub that blocks until released."""

    def __init__(self, result: ModelListResult) -> None:
        self.result = result
        self.release = asyncio.Event()
        self.calls = []

    async def discover(self, provider_id, api_key):
        self.calls.append((provider_id, api_key))
        await self.release.wait()
        return self.result


class GatedSubmitter(ConfigSubmitter):
    def __init__(self, tokens) -> None:
        super().__init__(http=None, tokens=tokens)
        self.release = asyncio.Event()
        self.payloads = []

    async def submit(self, payload):
        self.payloads.append(payload)
        await self.release.wait()
        return SaveResponse(ok=True, restarted=False, message="done")


def _session(http, tokens) -> WizardSession:
    return WizardSession.from_http(http, tokens=tokens)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_discovery_without_api_key_issues_no_request(make_http, tokens):
    http, handler = make_http({})
    session = _session(http, tokens)
    session.edit_api_key("   ")

    assert await session.fetch_models() is None
    assert handler.requests == []
    assert session.state.models_message == MSG_API_KEY_REQUIRED
    assert session.state.models_loading is False


@pytest.mark.asyncio
async def test_discovery_trims_key_and_replaces_models(make_http, tokens):
    http, handler = make_http(
        {"/api/models": httpx.Response(200, json={"models": ["m1", "m2"]})},
    )
    session = _session(http, tokens)
    session.edit_api_key("  sk-1 ")

    await session.fetch_models()

    assert handler.bodies("/api/models") == [{"provider": "openai", "apiKey": "sk-1"}]
    assert session.state.models == ("m1", "m2")
    assert session.state.models_message is None
    assert session.state.models_loading is False


@pytest.mark.asyncio
async def test_discovery_empty_list_shows_server_message(make_http, tokens):
    http, _ = make_http(
        {"/api/models": httpx.Response(200, json={"models": [], "message": "no auto-discovery"})},
    )
    session = _session(http, tokens)
    session.edit_api_key("k")
    await session.fetch_models()
    assert session.state.models == ()
    assert session.state.models_message == "no auto-discovery"


@pytest.mark.asyncio
async def test_discovery_http_error_clears_models(make_http, tokens):
    responses = {"/api/models": httpx.Response(200, json={"models": ["m1"]})}
    http, _ = make_http(responses)
    session = _session(http, tokens)
    session.edit_api_key("k")
    await session.fetch_models()
    assert session.state.models == ("m1",)

    responses["/api/models"] = httpx.Response(401, json={"message": "invalid key"})
    await session.fetch_models()
    assert session.state.models == ()
    assert session.state.models_message == "invalid key"


@pytest.mark.asyncio
async def test_discovery_network_failure_keeps_models(make_http, tokens):
    def boom(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    responses = {"/api/models": httpx.Response(200, json={"models": ["m1"]})}
    http, _ = make_http(responses)
    session = _session(http, tokens)
    session.edit_api_key("k")
    await session.fetch_models()

    responses["/api/models"] = boom
    await session.fetch_models()
    assert session.state.models == ("m1",)
    assert session.state.models_message == "获取模型失败，请检查网络或代理"


@pytest.mark.asyncio
async def test_only_one_discovery_in_flight(tokens):
    discovery = GatedDiscovery(ModelListResult(models=("m1",), message=None))
    session = WizardSession(discovery, ConfigSubmitter(None, tokens), tokens=tokens)
    session.edit_api_key("k")

    first = asyncio.create_task(session.fetch_models())
    await asyncio.sleep(0)
    assert session.state.models_loading is True

    assert await session.fetch_models() is None
    assert len(discovery.calls) == 1

    discovery.release.set()
    assert (await first).models == ("m1",)
    assert session.state.models_loading is False


@pytest.mark.asyncio
async def test_stale_discovery_response_is_discarded(tokens):
    discovery = GatedDiscovery(ModelListResult(models=("gpt-4o",), message=None))
    session = WizardSession(discovery, ConfigSubmitter(None, tokens), tokens=tokens)
    session.edit_api_key("k")

    pending = asyncio.create_task(session.fetch_models())
    await asyncio.sleep(0)
    session.select_provider("anthropic")
    discovery.release.set()

    assert await pending is None
    assert session.state.provider_id == "anthropic"
    assert session.state.models == ()
    assert session.state.models_message is None
    assert session.state.models_loading is False


@pytest.mark.asyncio
async def test_discovery_response_discarded_after_key_change(tokens):
    discovery = GatedDiscovery(ModelListResult(models=("gpt-4o",), message=None))
    session = WizardSession(discovery, ConfigSubmitter(None, tokens), tokens=tokens)
    session.edit_api_key("old")

    pending = asyncio.create_task(session.fetch_models())
    await asyncio.sleep(0)
    session.edit_api_key("new")
    discovery.release.set()

    assert await pending is None
    assert session.state.models == ()


# ---------------------------------------------------------------------------
# Save
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_save_defaults_without_api_key(make_http, tokens):
    http, handler = make_http({"/api/config": httpx.Response(200, json=SAVED)})
    session = _session(http, tokens)
    token = session.state.gateway_token

    status = await session.save()

    (body,) = handler.bodies("/api/config")
    assert body == {
        "model": "openai/gpt-4o-mini",
        "gatewayToken": token,
        "providers": [],
    }
    assert HEX48.match(body["gatewayToken"])
    assert status.ok and status.restarted
    assert status.restart_error is None
    assert session.state.status == status
    assert session.state.saving is False


@pytest.mark.asyncio
async def test_save_custom_provider_sends_one_credential(make_http, tokens):
    http, handler = make_http({"/api/config": httpx.Response(200, json=SAVED)})
    session = _session(http, tokens)
    session.select_provider("custom")
    session.set_custom_env_key("FOO_KEY")
    session.edit_api_key("abc")

    await session.save()

    (body,) = handler.bodies("/api/config")
    assert body["providers"] == [{"key": "FOO_KEY", "value": "abc"}]


@pytest.mark.asyncio
async def test_save_trims_model_and_credential(make_http, tokens):
    http, handler = make_http({"/api/config": httpx.Response(200, json=SAVED)})
    session = _session(http, tokens)
    session.edit_model("  deepseek/deepseek-chat ")
    session.edit_api_key(" sk-x ")

    await session.save()

    (body,) = handler.bodies("/api/config")
    assert body["model"] == "deepseek/deepseek-chat"
    assert body["providers"] == [{"key": "OPENAI_API_KEY", "value": "sk-x"}]


@pytest.mark.asyncio
async def test_save_custom_without_env_key_sends_no_credential(make_http, tokens):
    http, handler = make_http({"/api/config": httpx.Response(200, json=SAVED)})
    session = _session(http, tokens)
    session.select_provider("custom")
    session.edit_api_key("abc")

    await session.save()

    (body,) = handler.bodies("/api/config")
    assert body["providers"] == []


@pytest.mark.asyncio
async def test_save_with_blank_model_is_a_noop(make_http, tokens):
    http, handler = make_http({})
    session = _session(http, tokens)
    session.edit_model("   ")

    assert await session.save() is None
    assert handler.requests == []
    assert session.state.status is None


@pytest.mark.asyncio
async def test_blank_token_is_regenerated_and_kept(make_http, tokens):
    http, handler = make_http({"/api/config": httpx.Response(200, json=SAVED)})
    session = _session(http, tokens)
    session.edit_token("  ")

    await session.save()

    (body,) = handler.bodies("/api/config")
    assert HEX48.match(body["gatewayToken"])
    assert session.state.gateway_token == body["gatewayToken"]


@pytest.mark.asyncio
async def test_token_is_trimmed_but_session_copy_kept(make_http, tokens):
    http, handler = make_http({"/api/config": httpx.Response(200, json=SAVED)})
    session = _session(http, tokens)
    session.edit_token(" my-token ")

    await session.save()

    (body,) = handler.bodies("/api/config")
    assert body["gatewayToken"] == "my-token"
    assert session.state.gateway_token == " my-token "


@pytest.mark.asyncio
async def test_partial_success_is_passed_through(make_http, tokens):
    reply = {
        "ok": False,
        "restarted": False,
        "message": "配置已保存，但重启失败",
        "restartError": "docker compose down: exit status 1",
    }
    http, _ = make_http({"/api/config": httpx.Response(200, json=reply)})
    session = _session(http, tokens)

    status = await session.save()

    assert status.message == reply["message"]
    assert status.restart_error == reply["restartError"]


@pytest.mark.asyncio
async def test_transport_failure_synthesizes_status(make_http, tokens):
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    http, _ = make_http({"/api/config": boom})
    session = _session(http, tokens)

    status = await session.save()

    assert status.ok is False
    assert status.restarted is False
    assert status.message == MSG_SAVE_FAILED
    assert status.restart_error == "connection refused"
    assert session.state.status == status
    assert session.state.saving is False


@pytest.mark.asyncio
async def test_unparseable_response_synthesizes_status(make_http, tokens):
    http, _ = make_http({"/api/config": httpx.Response(500, text="Internal Server Error")})
    session = _session(http, tokens)

    status = await session.save()

    assert status.ok is False
    assert status.message == MSG_SAVE_FAILED
    assert status.restart_error


@pytest.mark.asyncio
async def test_only_one_save_in_flight(tokens):
    submitter = GatedSubmitter(tokens)
    session = WizardSession(ModelDiscoveryClient(None), submitter, tokens=tokens)

    first = asyncio.create_task(session.save())
    await asyncio.sleep(0)
    assert session.state.saving is True
    assert session.state.status is None

    assert await session.save() is None
    assert len(submitter.payloads) == 1

    submitter.release.set()
    assert (await first).message == "done"
    assert session.state.saving is False


def test_session_given_state_without_token_generates_one(tokens):
    from clawsetup.wizard.state import ConfigurationState

    session = WizardSession(
        ModelDiscoveryClient(None),
        ConfigSubmitter(None, tokens),
        tokens=tokens,
        state=ConfigurationState(model="x"),
    )
    assert HEX48.match(session.state.gateway_token)


def test_listeners_see_every_snapshot(tokens):
    session = WizardSession(
        ModelDiscoveryClient(None),
        ConfigSubmitter(None, tokens),
        tokens=tokens,
    )
    seen = []
    session.subscribe(lambda state: seen.append(state.provider_id))
    session.select_provider("qwen")
    session.edit_model("qwen/qwen-max")
    assert seen == ["qwen", "qwen"]
