import json
import pytest
from typer.testing import CliRunner
from rewardrules.cli import app
from rewardrules.engine.settings import Settings, save_settings

runner = CliRunner()

@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.json"
    save_settings(Settings(rng_seed=5), path)
    return path

@pytest.fixture
def docs(tmp_path, if_then_else_xml, random_choice_xml):
    d = tmp_path / "rules"
    d.mkdir()
    (d / "ite.xml").write_text(if_then_else_xml, encoding="utf-8")
    (d / "rc.xml").write_text(random_choice_xml, encoding="utf-8")
    return d

def test_validate_ok(docs, settings_file):
    result = runner.invoke(app, ["validate", str(docs), "--settings", str(settings_file)])
    assert result.exit_code == 0, result.output
    assert "2 document(s) validated successfully." in result.output

def test_validate_reports_each_bad_file(docs, settings_file):
    (docs / "bad.xml").write_text("<modifiers><bogus_modifier/></modifiers>", encoding="utf-8")
    (docs / "range.xml").write_text('<modifiers><grant_xp_range min="9" max="1"/></modifiers>', encoding="utf-8")
    result = runner.invoke(app, ["validate", str(docs), "--settings", str(settings_file)])
    assert result.exit_code == 1
    assert "[ERROR]" in result.output
    assert "bogus_modifier" in result.output
    assert "min 9 > max 1" in result.output

def test_validate_honours_max_depth(docs, tmp_path):
    shallow = tmp_path / "shallow.json"
    save_settings(Settings(max_depth=2), shallow)
    result = runner.invoke(app, ["validate", str(docs / "ite.xml"), "--settings", str(shallow)])
    assert result.exit_code == 1
    assert "max_depth=2" in result.output

def test_show_renders_tree(docs, settings_file):
    result = runner.invoke(app, ["show", str(docs / "ite.xml"), "--settings", str(settings_file)])
    assert result.exit_code == 0, result.output
    assert "if_then_else" in result.output
    assert "grant_stat_range" in result.output

def test_roll_is_repeatable_with_seed(docs, settings_file):
    args = ["roll", str(docs / "ite.xml"), "--seed", "3", "--times", "2", "--settings", str(settings_file)]
    first = runner.invoke(app, args)
    second = runner.invoke(app, args)
    assert first.exit_code == 0, first.output
    assert first.output == second.output
    assert "#1: currency gamecoins +" in first.output
    assert "clear inventory" in first.output

def test_roll_reports_parse_errors(tmp_path, settings_file):
    bad = tmp_path / "bad.xml"
    bad.write_text("<modifiers><grant_item/></modifiers>", encoding="utf-8")
    result = runner.invoke(app, ["roll", str(bad), "--settings", str(settings_file)])
    assert result.exit_code == 1
    assert "ikey" in result.output

def test_export_schemas(tmp_path):
    out = tmp_path / "schemas"
    result = runner.invoke(app, ["export-schemas", "--out", str(out)])
    assert result.exit_code == 0, result.output
    schema = json.loads((out / "Modifier.schema.json").read_text(encoding="utf-8"))
    assert "grant_xp_range" in json.dumps(schema)
    assert (out / "Requirement.schema.json").exists()

@pytest.mark.parametrize("command", ["show", "roll"])
def test_missing_document_is_reported(tmp_path, settings_file, command):
    result = runner.invoke(app, [command, str(tmp_path / "nope.xml"), "--settings", str(settings_file)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "[ERROR]" in result.output
    assert "cannot read document" in result.output
