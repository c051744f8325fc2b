"""Tests for HubSpot comment sync."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.core.hubspot import DEMO_NOTE_PREFIX, HubSpotSyncError, sync_comment_to_hubspot


@pytest.fixture
def mock_settings():
    with patch("app.core.hubspot.get_settings") as mock:
        settings = MagicMock()
        settings.HUBSPOT_ACCESS_TOKEN = "pat-test-token"
        settings.HUBSPOT_API_URL = "https://api.hubapi.com"
        settings.HUBSPOT_TIMEOUT_SECONDS = 15
        mock.return_value = settings
        yield settings


def _mock_client(MockClient, response=None, error=None):
    client_instance = AsyncMock()
    if error is not None:
        client_instance.post.side_effect = error
    else:
        client_instance.post.return_value = response
    MockClient.return_value.__aenter__ = AsyncMock(return_value=client_instance)
    MockClient.return_value.__aexit__ = AsyncMock(return_value=None)
    return client_instance


class TestMissingArguments:
    @pytest.mark.asyncio
    async def test_missing_deal_id_raises(self):
        with pytest.raises(HubSpotSyncError, match="Missing hubspot_deal_id or comment"):
            await sync_comment_to_hubspot(None, "hello")

    @pytest.mark.asyncio
    async def test_missing_comment_raises(self):
        with pytest.raises(HubSpotSyncError):
            await sync_comment_to_hubspot("12345", "")


class TestDemoMode:
    @pytest.mark.asyncio
    async def test_no_token_returns_mock_note(self):
        with patch("httpx.AsyncClient") as MockClient:
            result = await sync_comment_to_hubspot("12345", "Great call today")

        MockClient.assert_not_called()
        assert result.success is True
        assert result.demo_mode is True
        assert result.hubspot_note_id.startswith(DEMO_NOTE_PREFIX)
        assert len(result.hubspot_note_id) > len(DEMO_NOTE_PREFIX)
        assert result.message == "Comment synced successfully (demo mode)"


class TestLiveSync:
    @pytest.mark.asyncio
    async def test_success_returns_note_id(self, mock_settings):
        mock_response = MagicMock()
        mock_response.is_success = True
        mock_response.json.return_value = {"id": "note-987"}

        with patch("httpx.AsyncClient") as MockClient:
            client_instance = _mock_client(MockClient, response=mock_response)
            result = await sync_comment_to_hubspot("12345", "Great call today")

        assert result.success is True
        assert result.demo_mode is False
        assert result.hubspot_note_id == "note-987"

        url = client_instance.post.call_args[0][0]
        kwargs = client_instance.post.call_args[1]
        assert url == "https://api.hubapi.com/crm/v3/objects/deals/12345/notes"
        assert kwargs["headers"]["Authorization"] == "Bearer pat-test-token"
        assert kwargs["json"]["properties"]["hs_note_body"] == "Great call today"
        assert "hs_timestamp" in kwargs["json"]["properties"]

    @pytest.mark.asyncio
    async def test_error_status_is_reported_not_raised(self, mock_settings):
        mock_response = MagicMock()
        mock_response.is_success = False
        mock_response.status_code = 401
        mock_response.text = '{"message":"expired token"}'

        with patch("httpx.AsyncClient") as MockClient:
            client_instance = _mock_client(MockClient, response=mock_response)
            result = await sync_comment_to_hubspot("12345", "Great call today")

        assert result.success is False
        assert result.error == "Failed to sync to HubSpot"
        assert result.details == '{"message":"expired token"}'
        assert client_instance.post.call_count == 1

    @pytest.mark.asyncio
    async def test_transport_error_is_reported_not_raised(self, mock_settings):
        with patch("httpx.AsyncClient") as MockClient:
            client_instance = _mock_client(MockClient, error=httpx.ConnectError("connection refused"))
            result = await sync_comment_to_hubspot("12345", "Great call today")

        assert result.success is False
        assert result.error == "connection refused"
        assert client_instance.post.call_count == 1

    @pytest.mark.asyncio
    async def test_non_json_body_is_reported_not_raised(self, mock_settings):
        mock_response = MagicMock()
        mock_response.is_success = True
        mock_response.text = "<html>Gateway</html>"
        mock_response.json.side_effect = ValueError("Expecting value")

        with patch("httpx.AsyncClient") as MockClient:
            _mock_client(MockClient, response=mock_response)
            result = await sync_comment_to_hubspot("12345", "Great call today")

        assert result.success is False
        assert result.error == "Unreadable response from HubSpot"
        assert result.hubspot_note_id is None

    @pytest.mark.asyncio
    async def test_list_body_is_reported_not_raised(self, mock_settings):
        mock_response = MagicMock()
        mock_response.is_success = True
        mock_response.json.return_value = []

        with patch("httpx.AsyncClient") as MockClient:
            _mock_client(MockClient, response=mock_response)
            result = await sync_comment_to_hubspot("12345", "Great call today")

        assert result.success is False
        assert result.error == "Unreadable response from HubSpot"
