import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port

from flashdeck.exceptions import NetworkError, ProviderError
from flashdeck.fetchers import GoogleTranslateClient


def run_against(handler, text="hello", source="en", target="ru", timeout=5):
    """Serve `handler` locally and make one client call against it."""
    received = {}

    async def recording_handler(request):
        received["query"] = dict(request.query)
        received["json"] = await request.json()
        return await handler(request)

    async def scenario():
        app = web.Application()
        app.router.add_post("/translate", recording_handler)
        async with TestServer(app) as server:
            async with GoogleTranslateClient(
                api_key="test-key",
                endpoint=str(server.make_url("/translate")),
                timeout=timeout,
            ) as client:
                return await client.call(text, source, target)

    return asyncio.run(scenario()), received


def test_successful_translation_and_request_shape():
    async def handler(request):
        return web.json_response({"data": {"translations": [{"translatedText": "привет"}]}})

    result, received = run_against(handler)

    assert result == "привет"
    assert received["query"] == {"key": "test-key"}
    assert received["json"] == {"q": "hello", "source": "en", "target": "ru", "format": "text"}


def test_provider_error_message_passed_through():
    async def handler(request):
        return web.json_response(
            {"error": {"code": 400, "message": "Bad language pair: en|xx"}}, status=400
        )

    with pytest.raises(ProviderError) as exc_info:
        run_against(handler)

    assert str(exc_info.value) == "Bad language pair: en|xx"
    assert exc_info.value.status == 400


def test_provider_error_without_message_uses_generic_text():
    async def handler(request):
        return web.json_response({"error": {"code": 403}}, status=403)

    with pytest.raises(ProviderError) as exc_info:
        run_against(handler)

    assert str(exc_info.value) == ProviderError.GENERIC_MESSAGE


def test_http_error_without_json_body_is_provider_error():
    async def handler(request):
        return web.Response(status=503, text="Service Unavailable")

    with pytest.raises(ProviderError) as exc_info:
        run_against(handler)

    assert exc_info.value.status == 503


def test_unexpected_success_shape_is_provider_error():
    async def handler(request):
        return web.json_response({"data": {"translations": []}})

    with pytest.raises(ProviderError):
        run_against(handler)


def test_timeout_is_network_error():
    async def handler(request):
        await asyncio.sleep(0.5)
        return web.json_response({"data": {"translations": [{"translatedText": "late"}]}})

    with pytest.raises(NetworkError):
        run_against(handler, timeout=0.1)


def test_unreachable_provider_is_network_error():
    async def scenario():
        client = GoogleTranslateClient(
            api_key="test-key",
            endpoint=f"http://127.0.0.1:{unused_port()}/translate",
            timeout=2,
        )
        try:
            await client.call("hello", "en", "ru")
        finally:
            await client.close()

    with pytest.raises(NetworkError):
        asyncio.run(scenario())
