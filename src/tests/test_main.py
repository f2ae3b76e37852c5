"""
Command Line Tests
"""

import json
from unittest.mock import patch

import pytest

from smart_dns import main as main_module

pytestmark = pytest.mark.usefixtures("restore_logging")


@pytest.fixture
def cli_lookup(fake_lookup):
    with patch("smart_dns.core.resolver.DnsPythonLookup", return_value=fake_lookup):
        yield fake_lookup


class TestMain:
    """Test smart-dns command line"""

    def test_resolve_plain_output(self, cli_lookup, capsys):
        exit_code = main_module.main(["--provider", "google", "https://example.com/path"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "example.com -> 93.184.216.34 : https://93.184.216.34/path" in out
        assert cli_lookup.configurations[0].servers == ("8.8.8.8", "8.8.4.4")

    def test_resolve_json_output(self, cli_lookup, capsys):
        exit_code = main_module.main(
            ["--servers", "9.9.9.9,149.112.112.112", "--json", "https://example.com/"]
        )

        results = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert results == [
            {
                "address": "93.184.216.34",
                "hostname": "example.com",
                "rewritten_url": "https://93.184.216.34/",
            }
        ]
        assert cli_lookup.configurations[0].servers == ("9.9.9.9", "149.112.112.112")

    def test_invalid_url(self, cli_lookup, capsys):
        exit_code = main_module.main(["ftp://example.com"])

        assert exit_code == 1
        assert "http/https" in capsys.readouterr().err

    def test_invalid_provider(self, cli_lookup, capsys):
        exit_code = main_module.main(["--provider", "quad9", "https://example.com/"])

        assert exit_code == 1
        assert "Unsupported DNS provider" in capsys.readouterr().err
        assert cli_lookup.call_count == 0

    def test_lookup_failure(self, cli_lookup, capsys):
        cli_lookup.errors["example.com"] = RuntimeError("unreachable")

        exit_code = main_module.main(["https://example.com/"])

        assert exit_code == 1
        assert "DNS lookup failed for example.com" in capsys.readouterr().err

    def test_provider_and_servers_are_exclusive(self, cli_lookup):
        with pytest.raises(SystemExit):
            main_module.main(["--provider", "google", "--servers", "9.9.9.9", "https://a.test/"])
