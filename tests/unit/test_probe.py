# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from originhunter.config import HttpSettings, RunConfiguration
from originhunter.errors import BaselineError, ErrorCategory, TargetURLError
from originhunter.http.adapters import StubHttpClient
from originhunter.http.httpx_client import HttpxClient
from originhunter.http.models import HttpResponse
from originhunter.models import ProbeStatus, TargetDescriptor
from originhunter.scan.probe import OriginProbe, classify
from originhunter.similarity import SimilarityScorer

TARGET = TargetDescriptor.from_url("https://www.example.com/account?tab=1")
BODY = "<html><body>Welcome to example account page</body></html>"


def _config(**overrides):
    values = {"timeout": 2.0}
    values.update(overrides)
    return RunConfiguration(**values)


def test_target_descriptor_from_url():
    target = TargetDescriptor.from_url("http://user:pw@Shop.Example.com:8080/a/b?x=1#frag")
    assert target.scheme == "http"
    assert target.virtual_host == "Shop.Example.com:8080"
    assert target.hostname == "shop.example.com"
    assert target.path == "/a/b"
    assert target.query == "x=1"
    assert target.url == "http://Shop.Example.com:8080/a/b?x=1"
    assert target.url_for("10.0.0.1") == "http://10.0.0.1/a/b?x=1"
    assert target.uses_tls is False


def test_target_descriptor_without_path():
    target = TargetDescriptor.from_url("https://example.com")
    assert target.url_for("10.0.0.1") == "https://10.0.0.1"
    assert target.uses_tls is True


@pytest.mark.parametrize("url", ["", "example.com", "ftp://example.com/", "http://", "http://example.com:99999/"])
def test_target_descriptor_rejects_unusable_urls(url):
    with pytest.raises(TargetURLError):
        TargetDescriptor.from_url(url)


def test_classify_accepts_2xx_and_allowlist():
    assert classify(HttpResponse(ok=True, status_code=204), _config()) is ProbeStatus.SUCCESS
    assert classify(HttpResponse(ok=True, status_code=404), _config()) is ProbeStatus.REJECTED_STATUS
    assert classify(HttpResponse(ok=True, status_code=404), _config(accepted_statuses=frozenset({404}))) is ProbeStatus.SUCCESS
    assert classify(HttpResponse(ok=True, status_code=302), _config()) is ProbeStatus.REJECTED_STATUS


def test_classify_failures():
    timeout = HttpResponse(ok=False, error_category=ErrorCategory.TIMEOUT, error_message="timed out")
    refused = HttpResponse(ok=False, error_category=ErrorCategory.CONNECTION_ERROR, error_message="refused")
    assert classify(timeout, _config()) is ProbeStatus.TIMEOUT
    assert classify(refused, _config()) is ProbeStatus.TRANSPORT_ERROR


def test_probe_overrides_host_and_forwards_cookie():
    stub = StubHttpClient({"https://10.0.0.5/account?tab=1": HttpResponse(ok=True, status_code=200, text=BODY)})
    probe = OriginProbe(stub, _config(cookie="cf_clearance=abc"))
    outcome = probe.probe("10.0.0.5", TARGET, SimilarityScorer(BODY))

    assert outcome.status is ProbeStatus.SUCCESS
    assert outcome.similarity == 1.0
    assert outcome.status_code == 200
    request = stub.requests[0]
    assert request.headers == {"Host": "www.example.com", "Cookie": "cf_clearance=abc"}
    assert request.sni_hostname == "www.example.com"
    assert request.timeout == 2.0


def test_probe_omits_empty_cookie_and_sni_when_disabled():
    stub = StubHttpClient({"https://10.0.0.5/account?tab=1": HttpResponse(ok=True, status_code=200, text=BODY)})
    OriginProbe(stub, _config(), send_sni=False).probe("10.0.0.5", TARGET)
    assert stub.requests[0].headers == {"Host": "www.example.com"}
    assert stub.requests[0].sni_hostname is None


def test_probe_404_depends_on_allowlist():
    stub = StubHttpClient({"https://10.0.0.9/account?tab=1": HttpResponse(ok=True, status_code=404, text=BODY)})

    rejected = OriginProbe(stub, _config()).probe("10.0.0.9", TARGET, SimilarityScorer(BODY))
    assert rejected.status is ProbeStatus.REJECTED_STATUS
    assert rejected.similarity == 0.0
    assert "404" in rejected.error_message

    accepted = OriginProbe(stub, _config(accepted_statuses=frozenset({404}))).probe("10.0.0.9", TARGET, SimilarityScorer(BODY))
    assert accepted.status is ProbeStatus.SUCCESS
    assert accepted.similarity == 1.0


def test_probe_timeout_and_transport_error():
    stub = StubHttpClient(
        {
            "https://10.0.0.1/account?tab=1": HttpResponse(ok=False, error_category=ErrorCategory.TIMEOUT, error_message="read timed out"),
        }
    )
    probe = OriginProbe(stub, _config())
    timed_out = probe.probe("10.0.0.1", TARGET)
    assert timed_out.status is ProbeStatus.TIMEOUT
    assert not timed_out.succeeded
    assert "read timed out" in timed_out.error_message

    unreachable = probe.probe("10.0.0.2", TARGET)
    assert unreachable.status is ProbeStatus.TRANSPORT_ERROR


def test_fetch_baseline_uses_normal_path():
    stub = StubHttpClient({TARGET.url: HttpResponse(ok=True, status_code=200, text=BODY)})
    baseline = OriginProbe(stub, _config()).fetch_baseline(TARGET)
    assert baseline.body == BODY
    assert baseline.status_code == 200
    assert stub.requests[0].url == "https://www.example.com/account?tab=1"
    assert stub.requests[0].allow_redirects is True


def _redirecting_client():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "/new"})
        return httpx.Response(200, text=BODY)

    return HttpxClient(HttpSettings(), client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_fetch_baseline_follows_redirects_but_candidates_do_not():
    target = TargetDescriptor.from_url("http://shop.example.com/old")
    probe = OriginProbe(_redirecting_client(), _config())

    baseline = probe.fetch_baseline(target)
    assert baseline.status_code == 200
    assert baseline.body == BODY

    outcome = probe.probe("10.0.0.1", target, SimilarityScorer(baseline.body))
    assert outcome.status is ProbeStatus.REJECTED_STATUS
    assert outcome.status_code == 301


def test_fetch_baseline_warns_on_truncated_body(caplog):
    truncated = HttpResponse(ok=True, status_code=200, text=BODY, content=BODY.encode(), meta={"body_truncated": True})
    stub = StubHttpClient({TARGET.url: truncated})
    with caplog.at_level("WARNING", logger="originhunter.scan.probe"):
        OriginProbe(stub, _config()).fetch_baseline(TARGET)
    assert "truncated" in caplog.text


def test_fetch_baseline_failure_is_fatal():
    stub = StubHttpClient({TARGET.url: HttpResponse(ok=True, status_code=403, text="blocked")})
    with pytest.raises(BaselineError) as excinfo:
        OriginProbe(stub, _config()).fetch_baseline(TARGET)
    assert TARGET.url in str(excinfo.value)
    assert "403" in str(excinfo.value)

    with pytest.raises(BaselineError):
        OriginProbe(StubHttpClient(), _config()).fetch_baseline(TARGET)


def test_outcome_to_dict():
    stub = StubHttpClient({"https://10.0.0.5/account?tab=1": HttpResponse(ok=True, status_code=200, text=BODY)})
    outcome = OriginProbe(stub, _config()).probe("10.0.0.5", TARGET, SimilarityScorer(BODY))
    assert outcome.to_dict() == {
        "address": "10.0.0.5",
        "status": "SUCCESS",
        "similarity": 1.0,
        "status_code": 200,
        "error_message": None,
    }
    assert outcome.percent == 100.0
