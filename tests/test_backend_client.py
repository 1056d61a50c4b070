"""Unit tests for the backend HTTP client."""
import httpx
import pytest

from donatello_gateway.errors import (
    BackendError,
    ChatError,
    ErrorKind,
    HealthCheckError,
    MintError,
    UploadError,
)
from donatello_gateway.models import MintRequest, OpenSeaNFTMetadata

from .conftest import AGGREGATOR, BACKEND, UPLOAD_BODY


class TestUploadImage:
    """Tests for image upload to /analyze/image."""

    @pytest.mark.asyncio
    async def test_successful_upload_keeps_blob_id(self, backend_client, fake_backend, png_image):
        fake_backend.add("POST", f"{BACKEND}/analyze/image", httpx.Response(200, json=UPLOAD_BODY))

        result = await backend_client.upload_image(png_image)

        assert result.image_blob_id == UPLOAD_BODY["image_blob_id"]
        assert result.metadata_blob_id == "meta456"
        assert result.metadata.file_info.size.width == 640
        assert result.metadata.dominant_colors[0] == "#ff0000"

    @pytest.mark.asyncio
    async def test_upload_sends_multipart_image_field(self, backend_client, fake_backend, png_image):
        fake_backend.add("POST", f"{BACKEND}/analyze/image", httpx.Response(200, json=UPLOAD_BODY))

        await backend_client.upload_image(png_image)

        request = fake_backend.calls("POST", f"{BACKEND}/analyze/image")[0]
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="image"; filename="art.png"' in request.content

    @pytest.mark.asyncio
    async def test_upload_verifies_blob(self, backend_client, fake_backend, png_image):
        fake_backend.add("POST", f"{BACKEND}/analyze/image", httpx.Response(200, json=UPLOAD_BODY))

        await backend_client.upload_image(png_image)

        assert len(fake_backend.calls("HEAD", f"{AGGREGATOR}/v1/blobs/blob123")) == 1

    @pytest.mark.asyncio
    async def test_server_error_message_is_used(self, backend_client, fake_backend, png_image):
        fake_backend.add(
            "POST",
            f"{BACKEND}/analyze/image",
            httpx.Response(400, json={"error": "Corrupt image"}),
        )

        with pytest.raises(UploadError) as exc_info:
            await backend_client.upload_image(png_image)

        assert exc_info.value.message == "Corrupt image"
        assert exc_info.value.kind == ErrorKind.BACKEND
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_default_message_without_error_body(self, backend_client, fake_backend, png_image):
        fake_backend.add("POST", f"{BACKEND}/analyze/image", httpx.Response(500, text="boom"))

        with pytest.raises(UploadError) as exc_info:
            await backend_client.upload_image(png_image)

        assert exc_info.value.message == "Upload failed: Internal Server Error"

    @pytest.mark.asyncio
    async def test_connection_failure(self, backend_client, fake_backend, png_image):
        fake_backend.add(
            "POST", f"{BACKEND}/analyze/image", httpx.ConnectError("Connection refused")
        )

        with pytest.raises(UploadError) as exc_info:
            await backend_client.upload_image(png_image)

        assert exc_info.value.kind == ErrorKind.CONNECTIVITY
        assert "Connection refused" in exc_info.value.message


class TestSendChatMessage:
    """Tests for /chat requests."""

    @pytest.mark.asyncio
    async def test_plain_message(self, backend_client, fake_backend):
        fake_backend.add(
            "POST",
            f"{BACKEND}/chat",
            httpx.Response(200, json={"success": True, "response": "Ciao!", "message_id": 7}),
        )

        result = await backend_client.send_chat_message("Hello")

        assert result.response == "Ciao!"
        assert result.message_id == 7
        assert fake_backend.json_body("POST", f"{BACKEND}/chat") == {
            "message": "Hello",
            "image_context": None,
        }

    @pytest.mark.asyncio
    async def test_image_context_is_flattened(self, backend_client, fake_backend, upload_result):
        fake_backend.add(
            "POST", f"{BACKEND}/chat", httpx.Response(200, json={"success": True, "response": "ok"})
        )

        await backend_client.send_chat_message("Look", upload_result)

        context = fake_backend.json_body("POST", f"{BACKEND}/chat")["image_context"]
        assert context == {
            "filename": "art.png",
            "size": {"width": 640, "height": 480},
            "format": "PNG",
            "file_size": 204800,
            "blob_id": "blob123",
            "image_url": f"{BACKEND}/image/blob123",
            "dominant_colors": ["#ff0000", "#00ff00", "#0000ff", "#ffffff"],
            "analyzed_at": "2025-06-01T12:00:00",
        }

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope_raises(self, backend_client, fake_backend):
        fake_backend.add(
            "POST",
            f"{BACKEND}/chat",
            httpx.Response(200, json={"success": False, "error": "quota exceeded"}),
        )

        with pytest.raises(ChatError) as exc_info:
            await backend_client.send_chat_message("Hello")

        assert exc_info.value.message == "quota exceeded"
        assert exc_info.value.kind == ErrorKind.BACKEND

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope_without_error(self, backend_client, fake_backend):
        fake_backend.add("POST", f"{BACKEND}/chat", httpx.Response(200, json={"success": False}))

        with pytest.raises(ChatError, match="Failed to get AI response"):
            await backend_client.send_chat_message("Hello")

    @pytest.mark.asyncio
    async def test_http_error_without_body(self, backend_client, fake_backend):
        fake_backend.add("POST", f"{BACKEND}/chat", httpx.Response(502))

        with pytest.raises(ChatError) as exc_info:
            await backend_client.send_chat_message("Hello")

        assert exc_info.value.message == "Chat failed: Bad Gateway"
        assert exc_info.value.kind == ErrorKind.CONNECTIVITY

    @pytest.mark.asyncio
    async def test_timeout(self, backend_client, fake_backend):
        fake_backend.add("POST", f"{BACKEND}/chat", httpx.ReadTimeout("timed out"))

        with pytest.raises(ChatError) as exc_info:
            await backend_client.send_chat_message("Hello")

        assert exc_info.value.kind == ErrorKind.CONNECTIVITY
        assert "timeout" in exc_info.value.message.lower()


class TestHealthAndReads:
    """Tests for health, history and metadata reads."""

    @pytest.mark.asyncio
    async def test_health(self, backend_client, fake_backend):
        fake_backend.add(
            "GET",
            f"{BACKEND}/health",
            httpx.Response(
                200,
                json={
                    "status": "healthy",
                    "timestamp": "2025-06-01T12:00:00",
                    "services": {"walrus": "ok", "gemini": "ok"},
                },
            ),
        )

        status = await backend_client.check_health()

        assert status.status == "healthy"
        assert status.services["gemini"] == "ok"

    @pytest.mark.asyncio
    async def test_health_failure(self, backend_client, fake_backend):
        fake_backend.add("GET", f"{BACKEND}/health", httpx.Response(503))

        with pytest.raises(HealthCheckError, match="Health check failed: Service Unavailable"):
            await backend_client.check_health()

    @pytest.mark.asyncio
    async def test_health_non_json_body(self, backend_client, fake_backend):
        fake_backend.add("GET", f"{BACKEND}/health", httpx.Response(200, text="<html>ok</html>"))

        with pytest.raises(HealthCheckError, match="Invalid health response from backend"):
            await backend_client.check_health()

    @pytest.mark.asyncio
    async def test_health_body_without_status(self, backend_client, fake_backend):
        fake_backend.add("GET", f"{BACKEND}/health", httpx.Response(200, json={"uptime": 12}))

        with pytest.raises(HealthCheckError, match="Invalid health response from backend"):
            await backend_client.check_health()

    @pytest.mark.asyncio
    async def test_chat_history(self, backend_client, fake_backend):
        fake_backend.add(
            "GET",
            f"{BACKEND}/chat/history",
            httpx.Response(200, json={"history": [{"role": "user", "content": "hi"}]}),
        )

        history = await backend_client.get_chat_history()

        assert history.history[0].content == "hi"

    @pytest.mark.asyncio
    async def test_metadata_fetch(self, backend_client, fake_backend):
        fake_backend.add(
            "GET", f"{BACKEND}/metadata/meta456", httpx.Response(200, json={"any": ["thing"]})
        )

        assert await backend_client.get_image_metadata("meta456") == {"any": ["thing"]}

    @pytest.mark.asyncio
    async def test_metadata_fetch_failure(self, backend_client):
        with pytest.raises(BackendError, match="Failed to fetch metadata: Not Found"):
            await backend_client.get_image_metadata("missing")

    def test_image_urls(self, backend_client):
        assert backend_client.get_image_url("b1") == f"{BACKEND}/image/b1"
        assert backend_client.get_direct_walrus_url("b1") == f"{AGGREGATOR}/v1/blobs/b1"

    @pytest.mark.asyncio
    async def test_upload_nft_metadata(self, backend_client, fake_backend):
        fake_backend.add(
            "POST",
            f"{BACKEND}/upload/metadata",
            httpx.Response(200, json={"metadata_blob_id": "meta789"}),
        )
        metadata = OpenSeaNFTMetadata(name="Art", description="d", image="https://x/y")

        assert await backend_client.upload_nft_metadata(metadata) == "meta789"
        request = fake_backend.calls("POST", f"{BACKEND}/upload/metadata")[0]
        assert b'filename="metadata.json"' in request.content

    @pytest.mark.asyncio
    async def test_chat_history_malformed_body(self, backend_client, fake_backend):
        fake_backend.add("GET", f"{BACKEND}/chat/history", httpx.Response(200, text="not json"))

        with pytest.raises(BackendError, match="Invalid chat history from backend"):
            await backend_client.get_chat_history()

    @pytest.mark.asyncio
    async def test_chat_history_wrong_shape(self, backend_client, fake_backend):
        fake_backend.add(
            "GET", f"{BACKEND}/chat/history", httpx.Response(200, json={"history": "nope"})
        )

        with pytest.raises(BackendError, match="Invalid chat history from backend"):
            await backend_client.get_chat_history()

    @pytest.mark.asyncio
    async def test_metadata_fetch_non_json(self, backend_client, fake_backend):
        fake_backend.add("GET", f"{BACKEND}/metadata/meta456", httpx.Response(200, text="{"))

        with pytest.raises(BackendError, match="Invalid metadata from backend"):
            await backend_client.get_image_metadata("meta456")

    @pytest.mark.asyncio
    async def test_upload_nft_metadata_without_blob_id(self, backend_client, fake_backend):
        fake_backend.add(
            "POST", f"{BACKEND}/upload/metadata", httpx.Response(200, json={"success": True})
        )
        metadata = OpenSeaNFTMetadata(name="Art", description="d", image="https://x/y")

        with pytest.raises(BackendError, match="no metadata_blob_id"):
            await backend_client.upload_nft_metadata(metadata)


class TestMintNft:
    """Tests for the mint relay call."""

    @pytest.mark.asyncio
    async def test_mint_payload_defaults(self, backend_client, fake_backend):
        fake_backend.add(
            "POST",
            f"{BACKEND}/api/mint-nft",
            httpx.Response(
                200,
                json={
                    "transactionHash": "0xabc",
                    "tokenId": 42,
                    "contractAddress": "0xcontract",
                    "openseaUrl": "https://opensea.io/assets/42",
                },
            ),
        )

        result = await backend_client.mint_nft(
            MintRequest(svg_url="https://x/art.svg", user_address="0xuser")
        )

        assert result.success
        assert result.token_id == "42"
        assert fake_backend.json_body("POST", f"{BACKEND}/api/mint-nft") == {
            "svgUrl": "https://x/art.svg",
            "userAddress": "0xuser",
            "title": "Donatello AI Artwork",
            "description": "AI-generated artwork converted to SVG",
        }

    @pytest.mark.asyncio
    async def test_mint_uses_override_url(self, settings, http_client, fake_backend):
        from donatello_gateway.clients import BackendClient

        override = settings.model_copy(update={"mint_backend_url": "http://minter.test"})
        fake_backend.add(
            "POST", "http://minter.test/api/mint-nft", httpx.Response(200, json={"tokenId": "1"})
        )

        result = await BackendClient(override, http_client).mint_nft(
            MintRequest(svg_url="s", user_address="u")
        )

        assert result.token_id == "1"

    @pytest.mark.asyncio
    async def test_mint_failure(self, backend_client, fake_backend):
        fake_backend.add("POST", f"{BACKEND}/api/mint-nft", httpx.Response(500))

        with pytest.raises(MintError, match="Failed to mint NFT"):
            await backend_client.mint_nft(MintRequest(svg_url="s", user_address="u"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reply",
        [
            httpx.Response(200, text="<html>Bad Gateway</html>"),
            httpx.Response(200, json=["0xabc"]),
            httpx.Response(200, json={"transactionHash": 12345}),
        ],
    )
    async def test_unusable_success_body(self, backend_client, fake_backend, reply):
        fake_backend.add("POST", f"{BACKEND}/api/mint-nft", reply)

        with pytest.raises(MintError, match="Failed to mint NFT"):
            await backend_client.mint_nft(MintRequest(svg_url="s", user_address="u"))
