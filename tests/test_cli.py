"""Tests for formschema.cli: ``formschema check`` and ``formschema validate``."""

import io
import json
from pathlib import Path

import pytest

from formschema.cli import main

FORM = {
    "fields": [
        {"type": "text", "name": "email", "label": "Email", "kind": "email"},
        {
            "type": "password",
            "name": "password",
            "label": "Password",
            "confirm_password": True,
        },
    ]
}


def write_json(path: Path, data: object) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


@pytest.fixture
def form_path(tmp_path: Path) -> str:
    return write_json(tmp_path / "form.json", FORM)


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "formschema" in capsys.readouterr().out


class TestCheck:
    def test_clean_form(self, form_path: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check", form_path])
        out = capsys.readouterr().out
        assert "Compiled 3 field(s)." in out
        assert "No issues found." in out

    def test_warnings_reported(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = write_json(
            tmp_path / "dup.json",
            [{"type": "text", "name": "a"}, {"type": "text", "name": "a"}],
        )
        main(["check", path])
        out = capsys.readouterr().out
        assert "1 warning(s)" in out
        assert "duplicate-field" in out

    def test_strict_fails_on_warnings(self, tmp_path: Path) -> None:
        path = write_json(
            tmp_path / "dup.json",
            [{"type": "text", "name": "a"}, {"type": "text", "name": "a"}],
        )
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "--strict", path])
        assert exc_info.value.code == 1

    def test_compile_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = write_json(tmp_path / "bad.json", [{"type": "select", "name": "role"}])
        with pytest.raises(SystemExit) as exc_info:
            main(["check", path])
        assert exc_info.value.code == 1
        assert "Error: role:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(tmp_path / "nope.json")])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestValidate:
    def test_valid_record(
        self, form_path: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        record = write_json(
            tmp_path / "record.json",
            {"email": "ada@example.com", "password": "pw", "passwordConfirm": "pw"},
        )
        main(["validate", form_path, record])
        output = json.loads(capsys.readouterr().out)
        assert output["success"] is True
        assert output["data"]["email"] == "ada@example.com"

    def test_invalid_record(
        self, form_path: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        record = write_json(
            tmp_path / "record.json",
            {"email": "ada@example.com", "password": "pw", "passwordConfirm": "other"},
        )
        with pytest.raises(SystemExit) as exc_info:
            main(["validate", form_path, record])
        assert exc_info.value.code == 1
        output = json.loads(capsys.readouterr().out)
        assert output == {
            "success": False,
            "errors": {"passwordConfirm": "passwords do not match"},
        }

    def test_record_from_stdin(
        self,
        form_path: str,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        record = {"email": "ada@example.com", "password": "pw", "passwordConfirm": "pw"}
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(record)))
        main(["validate", form_path, "-"])
        assert json.loads(capsys.readouterr().out)["success"] is True

    def test_record_must_be_object(
        self, form_path: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        record = write_json(tmp_path / "record.json", ["not", "an", "object"])
        with pytest.raises(SystemExit) as exc_info:
            main(["validate", form_path, record])
        assert exc_info.value.code == 1
        assert "JSON object" in capsys.readouterr().err

    def test_malformed_record(
        self, form_path: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "record.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["validate", form_path, str(path)])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
