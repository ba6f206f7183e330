"""Tests for the nutrinorm command line entry point."""

import io
import json
import logging

import pytest

from nutrinorm.cli import main
from nutrinorm.logging_config import StructuredJsonFormatter

pytestmark = [pytest.mark.cli, pytest.mark.usefixtures("restore_root_logger")]


@pytest.fixture
def recipe_file(tmp_path):
    path = tmp_path / "recipe.txt"
    path.write_text("100 ml Soy milk\n1 pinch salt and pepper\n\nsalt\n", encoding="utf-8")
    return path


def test_json_output(recipe_file, capsys):
    assert main([str(recipe_file)]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["ingredients"] == [
        {"quantity": 100.0, "unit": "g", "name": "soy milk"},
        {"quantity": 0.3, "unit": "g", "name": "salt"},
        {"quantity": 0.3, "unit": "g", "name": "pepper"},
    ]
    assert "diagnostics" not in output


def test_text_output_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1 pinch salt and pepper\n2 tbsp balsamic glaze\n"))
    assert main(["--format", "text"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "0.3 g salt",
        "0.3 g pepper",
        "2 tablespoon balsamic vinegar",
    ]


def test_diagnostics(recipe_file, capsys):
    assert main([str(recipe_file), "--diagnostics"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert {"original": "salt", "normalized": None, "reason": "unparsed"} in output["diagnostics"]


def test_servings(recipe_file, capsys):
    assert main([str(recipe_file), "--servings", "4"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output == {
        "ingredients": ["100 g soy milk", "0.3 g salt", "0.3 g pepper"],
        "servings": 4.0,
    }


def test_policy_flags(recipe_file, capsys):
    args = [str(recipe_file), "--format", "text", "--unparsed-policy", "bare_name"]
    args += ["--composite-policy", "infer", "--pinch-grams", "0.5"]
    assert main(args) == 0
    assert capsys.readouterr().out.splitlines() == [
        "100 g soy milk",
        "0.5 g salt",
        "1 teaspoon pepper",
        "1 salt",
    ]


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt")]) == 1
    assert capsys.readouterr().out == ""


def test_log_level_flag_beats_environment(recipe_file, monkeypatch, capsys):
    monkeypatch.setenv("NUTRINORM_LOG_LEVEL", "WARNING")
    assert main([str(recipe_file), "--log-level", "DEBUG"]) == 0
    assert logging.getLogger().level == logging.DEBUG


def test_log_level_from_environment(recipe_file, monkeypatch, capsys):
    monkeypatch.setenv("NUTRINORM_LOG_LEVEL", "WARNING")
    assert main([str(recipe_file)]) == 0
    assert logging.getLogger().level == logging.WARNING


def test_json_logs_from_dotenv(recipe_file, tmp_path, capsys):
    (tmp_path / ".env").write_text("NUTRINORM_LOG_FORMAT=json\n")
    assert main([str(recipe_file)]) == 0
    formatter = logging.getLogger().handlers[0].formatter
    assert isinstance(formatter, StructuredJsonFormatter)


def test_json_logs_in_production(recipe_file, monkeypatch, capsys):
    monkeypatch.setenv("NUTRINORM_ENVIRONMENT", "production")
    assert main([str(recipe_file)]) == 0
    formatter = logging.getLogger().handlers[0].formatter
    assert isinstance(formatter, StructuredJsonFormatter)


def test_invalid_pinch_grams(recipe_file, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([str(recipe_file), "--pinch-grams", "-1"])
    assert exc_info.value.code == 2
    assert "pinch_in_grams" in capsys.readouterr().err
