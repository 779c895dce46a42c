"""
Tests for the rtctoken command line interface.
"""

import json

from rtctoken import build_media_token, build_messaging_token
from rtctoken.cli import main


class TestIssueCommands:
    """Tests for the media and messaging commands."""

    def test_media_from_env(self, credential_env, app_id, app_certificate, capsys):
        assert main(["media", "room1", "user42"]) == 0

        out = capsys.readouterr().out.strip()
        assert out == build_media_token(app_id, app_certificate, "room1", "user42", 86400)

    def test_messaging_with_flags(self, no_credential_env, app_id, app_certificate, capsys):
        code = main(
            ["messaging", "user42", "--app-id", app_id, "--app-certificate", app_certificate, "--expiry", "60"]
        )

        assert code == 0
        out = capsys.readouterr().out.strip()
        assert out == build_messaging_token(app_id, app_certificate, "user42", 60)

    def test_missing_credentials(self, no_credential_env, capsys):
        assert main(["messaging", "user42"]) == 1
        assert "Missing credentials" in capsys.readouterr().err

    def test_invalid_credentials(self, no_credential_env, app_certificate, capsys):
        code = main(["media", "room1", "user42", "--app-id", "xyz", "--app-certificate", app_certificate])

        assert code == 1
        assert "appId" in capsys.readouterr().err

    def test_media_empty_channel_rejected(self, credential_env, capsys):
        """The CLI applies the same identifier checks as the HTTP service."""
        assert main(["media", "", "user42"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Channel name cannot be null or empty" in captured.err

    def test_media_blank_uid_rejected(self, credential_env, capsys):
        assert main(["media", "room1", " \t"]) == 1
        assert "UID cannot be null or empty" in capsys.readouterr().err

    def test_messaging_uid_too_long(self, credential_env, capsys):
        assert main(["messaging", "u" * 65]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "cannot exceed 64 characters" in captured.err

    def test_media_channel_too_long(self, credential_env, capsys):
        assert main(["media", "c" * 65, "user42"]) == 1
        assert "Channel name cannot exceed" in capsys.readouterr().err

    def test_messaging_uid_at_limit(self, credential_env, capsys):
        assert main(["messaging", "u" * 64]) == 0

    def test_expiry_out_of_range(self, credential_env, capsys):
        assert main(["messaging", "user42", "--expiry", str(2**31)]) == 1
        assert "32 bits" in capsys.readouterr().err


class TestInspectCommand:
    """Tests for the inspect command."""

    def test_inspect_text(self, app_id, app_certificate, capsys):
        token = build_media_token(app_id, app_certificate, "room1", "user42", 86400)

        assert main(["inspect", token]) == 0

        captured = capsys.readouterr()
        assert f"App ID:       {app_id}" in captured.out
        assert "JOIN_CHANNEL (1): 86400" in captured.out
        assert "PUBLISH_VIDEO_STREAM (3): 86400" in captured.out
        assert "not verified" in captured.err

    def test_inspect_json(self, app_id, app_certificate, capsys):
        token = build_messaging_token(app_id, app_certificate, "user42", 60)

        assert main(["inspect", token, "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["version"] == "006"
        assert data["app_id"] == app_id
        assert data["privileges"] == [{"code": 1000, "expiry": 60}]
        assert len(bytes.fromhex(data["signature"])) == 32

    def test_inspect_malformed(self, capsys):
        assert main(["inspect", "not-a-token"]) == 1
        assert "Error" in capsys.readouterr().err


class TestNoCommand:
    def test_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()
