"""
Pytest configuration and fixtures for spell-check service tests.
"""
import os
from typing import AsyncGenerator, Dict, List, Union

import pytest
from httpx import AsyncClient, ASGITransport

# Keep test runs independent of a developer's .env
os.environ.setdefault("DEFAULT_SPELLCHECK_PROVIDER", "daum")

from app.main import app
from app.services.spellcheck_base import SpellCheckError, SpellCheckService


class FakeSpellCheckService(SpellCheckService):
    """
    Scripted backend for tests.

    `responses` maps a chunk's text to either a list of issues or an exception
    to raise. Chunks not in the map return no issues.
    """

    def __init__(
        self,
        provider: str,
        responses: Dict[str, Union[List, Exception]] = None,
        fail_all: bool = False
    ):
        self.provider = provider
        self.responses = responses or {}
        self.fail_all = fail_all
        self.calls: List[str] = []

    async def check_text(self, text: str):
        self.calls.append(text)
        if self.fail_all:
            raise SpellCheckError(f"{self.provider.upper()} request timed out", provider=self.provider)
        response = self.responses.get(text, [])
        if isinstance(response, Exception):
            raise response
        return list(response)

    def get_provider_name(self) -> str:
        return self.provider

    def get_display_name(self) -> str:
        return self.provider.upper()


@pytest.fixture
def fake_services(monkeypatch):
    """
    Replace real backends with FakeSpellCheckService instances.

    Returns a dict {"daum": service, "pnu": service} that tests can script
    before issuing requests.
    """
    services = {
        "daum": FakeSpellCheckService("daum"),
        "pnu": FakeSpellCheckService("pnu"),
    }

    def factory(provider: str) -> SpellCheckService:
        return services[provider]

    monkeypatch.setattr("app.services.spellcheck.get_spellcheck_service_for_provider", factory)
    return services


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async test client for the FastAPI application.

    Backends are real unless the test also requests `fake_services`.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
def daum_result_page() -> str:
    """A trimmed Daum grammar checker result page with two errors."""
    return """
<html><body>
<div class="cont_spell">
  <a href="#none" class="txt_spell txt_spell_high" data-error-type="space" data-error-input="아버지가방에" data-error-output="아버지가 방에" data-error-context="아버지가방에 들어가신다">아버지가방에</a>
  <a href="#none" class="txt_spell" data-error-type="spell" data-error-input="됬다" data-error-output="됐다" data-error-context="일이 잘 됬다&quot;고">됬다</a>
</div>
</body></html>
"""


@pytest.fixture
def pnu_result_page() -> str:
    """A trimmed PNU speller result page with one entry holding two errors."""
    return """
<html><head><script>
	var pages = 1;
	data = [{"str":"외않되 아버지가방에","errInfo":[{"help":"철자 검사를 해 보니 이 어절은 분석할 수 없으므로 틀린 말로 판단하였습니다.<br/><br/>후보 어절은 이 철자검사/교정기에서 띄어쓰기, 붙여 쓰기, 음절대치와 같은 교정방법에 따라 수정한 결과입니다.","errorIdx":0,"correctMethod":1,"start":0,"errMsg":"","end":3,"orgStr":"외않되","candWord":"왜 안 돼|외 안 돼"},{"help":"띄어쓰기 오류입니다. &lt;예&gt; 참고","errorIdx":1,"correctMethod":2,"start":4,"errMsg":"","end":10,"orgStr":"아버지가방에","candWord":"아버지가 방에"}],"idx":0}];
</script></head><body></body></html>
"""
