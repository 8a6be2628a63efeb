import json
from pathlib import Path

from click.testing import CliRunner

from postman_codegen.cli import main
from postman_codegen.config import CONFIG_ENV, LANGUAGE_ENV

FIXTURES = Path(__file__).parent / "fixtures"
SAMPLE = str(FIXTURES / "sample.postman.json")


def _runner(monkeypatch) -> CliRunner:
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.delenv(LANGUAGE_ENV, raising=False)
    return CliRunner()


class TestCliLanguages:
    def test_default_selector(self, monkeypatch):
        result = _runner(monkeypatch).invoke(main, ["languages"])
        assert result.exit_code == 0
        assert "javascript-fetch\tJavaScript (Fetch)" in result.output
        assert "go\tGo (net/http)" in result.output
        assert "rust" not in result.output

    def test_all_languages(self, monkeypatch):
        result = _runner(monkeypatch).invoke(main, ["languages", "--all"])
        assert result.exit_code == 0
        assert "rust\tRust (reqwest)" in result.output
        assert "ruby\tRuby (HTTParty)" in result.output


class TestCliRequests:
    def test_lists_requests(self, monkeypatch):
        result = _runner(monkeypatch).invoke(main, ["requests", SAMPLE])
        assert result.exit_code == 0
        assert "Sample API (v2.1): 3 requests" in result.output
        assert "req-1\tPOST\tCreate User" in result.output

    def test_invalid_collection(self, monkeypatch):
        result = _runner(monkeypatch).invoke(main, ["requests", str(FIXTURES / "invalid.json")])
        assert result.exit_code != 0
        assert "Invalid Postman collection file" in result.output


class TestCliGenerate:
    def test_prints_snippet(self, monkeypatch):
        result = _runner(monkeypatch).invoke(main, ["generate", SAMPLE, "-l", "curl", "-r", "req-1"])
        assert result.exit_code == 0
        assert "curl -X POST 'https://api.example.com/api/users'" in result.output
        assert "-H 'Authorization: Bearer abc123'" in result.output

    def test_writes_files(self, monkeypatch, tmp_path):
        output_dir = tmp_path / "out"
        result = _runner(monkeypatch).invoke(main, ["generate", SAMPLE, "-l", "python", "-o", str(output_dir)])
        assert result.exit_code == 0
        assert (output_dir / "list-users.py").exists()
        assert (output_dir / "create-user.py").exists()
        assert (output_dir / "login.py").exists()
        assert "Generated 3 files" in result.output

    def test_append_skips_existing(self, monkeypatch, tmp_path):
        output_dir = tmp_path / "out"
        output_dir.mkdir()
        existing = output_dir / "login.sh"
        existing.write_text("# original", encoding="utf-8")

        result = _runner(monkeypatch).invoke(main, ["generate", SAMPLE, "-l", "curl", "-o", str(output_dir), "--append"])
        assert result.exit_code == 0
        assert existing.read_text(encoding="utf-8") == "# original"
        assert (output_dir / "create-user.sh").exists()

    def test_default_language_from_config(self, monkeypatch, tmp_path):
        config = tmp_path / "codegen.yaml"
        config.write_text("default_language: go\n", encoding="utf-8")
        result = _runner(monkeypatch).invoke(main, ["--config", str(config), "generate", SAMPLE, "-r", "req-0"])
        assert result.exit_code == 0
        assert "package main" in result.output

    def test_unknown_request_id(self, monkeypatch):
        result = _runner(monkeypatch).invoke(main, ["generate", SAMPLE, "-l", "curl", "-r", "req-9"])
        assert result.exit_code != 0
        assert "req-9" in result.output

    def test_unknown_language_rejected(self, monkeypatch):
        result = _runner(monkeypatch).invoke(main, ["generate", SAMPLE, "-l", "cobol"])
        assert result.exit_code != 0


def _write_collection(path: Path, names: list[str]) -> str:
    items = [{"name": n, "request": {"method": "GET", "url": "https://h.io/ping"}} for n in names]
    path.write_text(json.dumps({"info": {"name": "Names"}, "item": items}), encoding="utf-8")
    return str(path)


class TestCliExportNames:
    def test_path_separators_stay_inside_output(self, monkeypatch, tmp_path):
        collection = _write_collection(tmp_path / "c.json", ["GET /users", "../escape"])
        output_dir = tmp_path / "out"
        result = _runner(monkeypatch).invoke(main, ["generate", collection, "-l", "curl", "-o", str(output_dir)])
        assert result.exit_code == 0, result.output
        assert (output_dir / "get--users.sh").exists()
        assert (output_dir / "..-escape.sh").exists()
        assert not (tmp_path / "escape.sh").exists()
        assert "Generated 2 files" in result.output

    def test_repeated_names_get_distinct_files(self, monkeypatch, tmp_path):
        collection = _write_collection(tmp_path / "c.json", ["Ping", "Ping"])
        output_dir = tmp_path / "out"
        result = _runner(monkeypatch).invoke(main, ["generate", collection, "-l", "curl", "-o", str(output_dir)])
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in output_dir.iterdir()) == ["ping-req-1.sh", "ping.sh"]
        assert "Generated 2 files" in result.output
