"""
Integration tests for spell-check API routes.
"""
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from app.schemas.spellcheck import DaumSpellingIssue, PnuSpellingIssue
from app.services.spellcheck_base import SpellCheckError


TEXT = "외않되는지 모르겠다."


def _daum(token: str, suggestion: str) -> DaumSpellingIssue:
    return DaumSpellingIssue(token=token, suggestions=[suggestion], type="spell", context=TEXT)


def _pnu(token: str, suggestion: str) -> PnuSpellingIssue:
    return PnuSpellingIssue(token=token, suggestions=[suggestion], info="맞춤법 오류")


class TestSpellCheckEndpoint:
    """Tests for POST /api/spellcheck."""

    @pytest.mark.asyncio
    async def test_default_provider_is_daum(self, client: AsyncClient, fake_services):
        fake_services["daum"].responses = {TEXT: [_daum("외않되는지", "왜 안 되는지")]}

        response = await client.post("/api/spellcheck", json={"text": TEXT})

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["provider"] == "daum"
        assert data["text"] == TEXT
        assert data["warnings"] == []
        assert data["results"] == [{
            "source": "daum",
            "token": "외않되는지",
            "suggestions": ["왜 안 되는지"],
            "type": "spell",
            "context": TEXT,
        }]

    @pytest.mark.asyncio
    async def test_pnu_issue_shape(self, client: AsyncClient, fake_services):
        fake_services["pnu"].responses = {TEXT: [_pnu("외않되는지", "왜 안 되는지")]}

        response = await client.post("/api/spellcheck", json={"text": TEXT, "provider": "pnu"})

        assert response.status_code == 200
        result = response.json()["results"][0]
        assert result["source"] == "pnu"
        assert result["info"] == "맞춤법 오류"
        assert "type" not in result

    @pytest.mark.asyncio
    async def test_all_returns_union_with_source_tags(self, client: AsyncClient, fake_services):
        fake_services["daum"].responses = {TEXT: [_daum("외않되는지", "왜 안 되는지")]}
        fake_services["pnu"].responses = {TEXT: [_pnu("외않되는지", "왜 안 되는지")]}

        response = await client.post("/api/spellcheck", json={"text": TEXT, "provider": "all"})

        assert response.status_code == 200
        data = response.json()
        assert data["provider"] == "all"
        assert [r["source"] for r in data["results"]] == ["daum", "pnu"]

    @pytest.mark.asyncio
    async def test_partial_failure_returns_ok_with_warnings(self, client: AsyncClient, fake_services):
        text = "첫째 문단은 됬다.\n\n둘째 문단은 외않되.\n\n셋째 문단은 괜찮다."
        fake_services["daum"].responses = {
            "첫째 문단은 됬다.": [_daum("됬다", "됐다")],
            "둘째 문단은 외않되.": SpellCheckError("DAUM request timed out after 12.0s"),
        }

        with patch("app.services.spellcheck.settings") as mock_settings:
            mock_settings.SPELLCHECK_CHUNK_MAX_CHARS = 20
            response = await client.post("/api/spellcheck", json={"text": text})

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert [r["token"] for r in data["results"]] == ["됬다"]
        assert len(data["warnings"]) == 1
        assert "timed out" in data["warnings"][0]

    @pytest.mark.asyncio
    async def test_every_call_failing_returns_500(self, client: AsyncClient, fake_services):
        fake_services["daum"].fail_all = True

        response = await client.post("/api/spellcheck", json={"text": TEXT})

        assert response.status_code == 500
        data = response.json()
        assert data["ok"] is False
        assert "실패" in data["error"]

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_500(self, client: AsyncClient):
        with patch("app.routes.spellcheck.run_spellcheck", new_callable=AsyncMock) as mock_run:
            mock_run.side_effect = RuntimeError("unexpected")
            response = await client.post("/api/spellcheck", json={"text": TEXT})

        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "unexpected"}

    @pytest.mark.asyncio
    async def test_error_without_message_uses_generic_text(self, client: AsyncClient):
        with patch("app.routes.spellcheck.run_spellcheck", new_callable=AsyncMock) as mock_run:
            mock_run.side_effect = RuntimeError()
            response = await client.post("/api/spellcheck", json={"text": TEXT})

        assert response.status_code == 500
        assert response.json()["error"] == "서버 처리 중 오류가 발생했습니다."

    @pytest.mark.asyncio
    async def test_request_id_header(self, client: AsyncClient, fake_services):
        response = await client.post("/api/spellcheck", json={"text": TEXT})
        assert "x-request-id" in response.headers


class TestSpellCheckValidation:
    """Validation failures return 400 {ok: false, error}."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {},
        {"text": None},
        {"text": 123},
        {"text": ["a"]},
        {"text": ""},
        {"text": "   \n"},
        {"provider": "daum"},
    ])
    async def test_invalid_text_rejected(self, client: AsyncClient, fake_services, body):
        response = await client.post("/api/spellcheck", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["ok"] is False
        assert data["error"] == "유효한 'text'가 필요합니다."
        assert fake_services["daum"].calls == []

    @pytest.mark.asyncio
    async def test_unknown_provider_rejected(self, client: AsyncClient, fake_services):
        response = await client.post("/api/spellcheck", json={"text": TEXT, "provider": "naver"})

        assert response.status_code == 400
        data = response.json()
        assert data["ok"] is False
        assert "provider" in data["error"]
        assert fake_services["daum"].calls == []
        assert fake_services["pnu"].calls == []

    @pytest.mark.asyncio
    async def test_malformed_json_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/spellcheck",
            content=b'{"text": ',
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["ok"] is False


class TestPreviewEndpoint:
    """Tests for POST /api/spellcheck/preview."""

    @pytest.mark.asyncio
    async def test_applies_top_suggestions(self, client: AsyncClient):
        response = await client.post("/api/spellcheck/preview", json={
            "text": "외않되 그리고 됬다. 또 됬다.",
            "results": [
                {"source": "daum", "token": "됬다", "suggestions": ["됐다"], "type": "spell", "context": ""},
                {"source": "pnu", "token": "외않되", "suggestions": ["왜 안 돼", "외 안 돼"], "info": ""},
            ]
        })

        assert response.status_code == 200
        data = response.json()
        assert data["corrected_text"] == "왜 안 돼 그리고 됐다. 또 됐다."
        assert [c["issue_index"] for c in data["corrections"]] == [1, 0, 0]

    @pytest.mark.asyncio
    async def test_unknown_source_rejected(self, client: AsyncClient):
        response = await client.post("/api/spellcheck/preview", json={
            "text": "됬다",
            "results": [{"source": "naver", "token": "됬다", "suggestions": ["됐다"]}]
        })

        assert response.status_code == 400
        assert response.json()["ok"] is False


class TestApplyEndpoint:
    """Tests for POST /api/spellcheck/apply."""

    @pytest.mark.asyncio
    async def test_replaces_all_occurrences(self, client: AsyncClient):
        response = await client.post("/api/spellcheck/apply", json={
            "text": "됬다 그리고 됬다",
            "token": "됬다",
            "replacement": "됐다"
        })

        assert response.status_code == 200
        assert response.json() == {"ok": True, "text": "됐다 그리고 됐다", "replacements": 2}

    @pytest.mark.asyncio
    async def test_empty_token_rejected(self, client: AsyncClient):
        response = await client.post("/api/spellcheck/apply", json={
            "text": "됬다",
            "token": "",
            "replacement": "됐다"
        })

        assert response.status_code == 400
        assert response.json()["error"] == "유효한 'token'이 필요합니다."


class TestProvidersEndpoint:
    """Tests for GET /api/spellcheck/providers."""

    @pytest.mark.asyncio
    async def test_lists_providers(self, client: AsyncClient):
        response = await client.get("/api/spellcheck/providers")

        assert response.status_code == 200
        data = response.json()
        assert data["default_provider"] == "daum"
        assert [p["id"] for p in data["providers"]] == ["daum", "pnu"]
        assert data["selections"] == ["daum", "pnu", "all"]
        assert data["chunk_max_chars"] == 900

    @pytest.mark.asyncio
    async def test_invalid_default_provider_returns_error_shape(self, client: AsyncClient):
        with patch(
            "app.routes.spellcheck.get_effective_spellcheck_provider",
            side_effect=ValueError("Spell-check provider 'pnu' is not configured")
        ):
            response = await client.get("/api/spellcheck/providers")

        assert response.status_code == 500
        assert response.json() == {
            "ok": False,
            "error": "Spell-check provider 'pnu' is not configured",
        }
