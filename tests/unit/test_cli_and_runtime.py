# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import json

import pytest

from originhunter.cli import main as cli_main
from originhunter.cli.main import build_parser
from originhunter.config import HttpSettings, RunConfiguration
from originhunter.errors import BaselineError
from originhunter.http.adapters import StubHttpClient
from originhunter.http.models import HttpResponse
from originhunter.models import ProbeStatus
from originhunter.runtime import OriginHunter

BODY = "<html><body>Store front for shop.example.com</body></html>"


def _stub():
    return StubHttpClient(
        {
            "https://shop.example.com/": HttpResponse(ok=True, status_code=200, text=BODY),
            "https://10.0.0.1/": HttpResponse(ok=True, status_code=200, text=BODY),
            "https://10.0.0.2/": HttpResponse(ok=True, status_code=403, text="denied"),
        }
    )


def test_build_parser_defaults_and_flags():
    parser = build_parser()
    args = parser.parse_args(["https://example.com/"])
    assert args.url == "https://example.com/"
    assert args.address_list is None
    assert args.timeout is None
    assert args.json is False
    assert args.include_broadcast is False

    args = parser.parse_args(
        ["-l", "ips.txt", "--proxy", "socks5://127.0.0.1:9050", "-c", "a=b", "-s", "404,500", "-t", "3s", "-w", "5", "--json", "https://example.com/"]
    )
    assert args.address_list == "ips.txt"
    assert args.proxy == "socks5://127.0.0.1:9050"
    assert args.cookie == "a=b"
    assert args.status_codes == "404,500"
    assert args.timeout == "3s"
    assert args.workers == 5
    assert args.json is True


def test_missing_target_is_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main([])
    assert excinfo.value.code == 2
    assert "url" in capsys.readouterr().err


def test_runtime_hunt_expands_and_scores():
    client = _stub()
    seen = []
    with OriginHunter(RunConfiguration(timeout=1.0, max_workers=4), http_client=client, settings=HttpSettings()) as hunter:
        summary = hunter.hunt("https://shop.example.com/", ["10.0.0.1 - 10.0.0.2", "", "bad-"], on_result=seen.append)

    assert summary.dispatched == 2
    assert {o.address: o.status for o in seen} == {"10.0.0.1": ProbeStatus.SUCCESS, "10.0.0.2": ProbeStatus.REJECTED_STATUS}
    assert summary.matches[0].similarity == 1.0
    assert client.requests[0].url == "https://shop.example.com/"
    assert all(r.headers["Host"] == "shop.example.com" for r in client.requests)
    assert client.closed is True


def test_runtime_baseline_failure_stops_before_probing():
    client = StubHttpClient({"https://shop.example.com/": HttpResponse(ok=True, status_code=503, text="down")})
    hunter = OriginHunter(RunConfiguration(timeout=1.0), http_client=client, settings=HttpSettings())
    with pytest.raises(BaselineError):
        hunter.hunt("https://shop.example.com/", ["10.0.0.1"])
    assert [r.url for r in client.requests] == ["https://shop.example.com/"]


def test_runtime_builds_client_from_configuration(monkeypatch):
    captured = {}

    def fake_factory(settings, **kwargs):
        captured["settings"] = settings
        captured.update(kwargs)
        return _stub()

    monkeypatch.setattr("originhunter.runtime.create_default_http_client", fake_factory)
    config = RunConfiguration(timeout=2.0, proxy="http://127.0.0.1:8080", max_workers=3)
    OriginHunter(config, settings=HttpSettings(send_sni=False))
    assert captured["proxy"] == "http://127.0.0.1:8080"
    assert captured["timeout"] == 2.0
    assert captured["max_connections"] == 3


@pytest.fixture
def stub_runtime(monkeypatch):
    client = _stub()
    monkeypatch.setattr("originhunter.runtime.create_default_http_client", lambda *_a, **_k: client)
    return client


def test_cli_main_prints_matches_from_file(stub_runtime, tmp_path, capsys):
    path = tmp_path / "ips.txt"
    path.write_text("10.0.0.1\n10.0.0.2\n", encoding="utf-8")

    code = cli_main.main(["-l", str(path), "https://shop.example.com/"])

    assert code == 0
    out = capsys.readouterr().out
    assert out == "10.0.0.1" + " " * 9 + "100.00%\n"
    assert stub_runtime.closed is True


def test_cli_main_reads_stdin_and_emits_json(stub_runtime, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("10.0.0.1\n"))
    code = cli_main.main(["--json", "https://shop.example.com/"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out.strip())
    assert payload["address"] == "10.0.0.1"
    assert payload["similarity"] == 1.0


@pytest.mark.parametrize(
    ("argv", "fragment"),
    [
        (["-t", "forever", "https://shop.example.com/"], "'forever'"),
        (["--proxy", "ftp://x:1", "https://shop.example.com/"], "ftp://x:1"),
        (["shop.example.com"], "shop.example.com"),
        (["-l", "/nonexistent/ips.txt", "https://shop.example.com/"], "/nonexistent/ips.txt"),
    ],
)
def test_cli_main_setup_errors_are_fatal(stub_runtime, argv, fragment, capsys):
    code = cli_main.main(argv)
    assert code == 1
    err = capsys.readouterr().err
    assert err.startswith("ERROR: ")
    assert fragment in err
    assert stub_runtime.requests == []


def test_cli_main_baseline_failure_is_fatal(monkeypatch, tmp_path, capsys):
    client = StubHttpClient()
    monkeypatch.setattr("originhunter.runtime.create_default_http_client", lambda *_a, **_k: client)
    path = tmp_path / "ips.txt"
    path.write_text("10.0.0.1\n", encoding="utf-8")
    code = cli_main.main(["-l", str(path), "https://shop.example.com/"])
    assert code == 1
    assert "baseline request" in capsys.readouterr().err
    assert len(client.requests) == 1
