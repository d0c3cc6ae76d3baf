#!/usr/bin/env python3
"""
End-to-end CLI tests using the builtin engine.
"""

import json
from xml.etree import ElementTree as ET

import pytest

from xliffconv.cli import main

UUID_A = "11111111-aaaa-4bbb-8ccc-000000000001"
NS20 = {"x": "urn:oasis:names:tc:xliff:document:2.0"}


def run_failing(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


@pytest.fixture
def source_json(tmp_path):
    path = tmp_path / "source.json"
    path.write_text(json.dumps([
        {"uuid": UUID_A, "title": "Drink water", "body": "Start <b>now</b> & relax."},
    ]), encoding="utf-8")
    return path


def test_to_xliff_and_back(tmp_path, source_json, capsys):
    """Test 1: to-xliff writes XLIFF 2.0; filled targets come back through to-json."""
    xliff = tmp_path / "out" / "source.xliff"
    main(["to-xliff", str(source_json), str(xliff), "en", "ko", "--engine", "builtin"])

    report = json.loads(capsys.readouterr().out)
    assert report["status"] == "ok"
    assert report["stats"]["translation_units"] == 2

    # Play translator: fill in the targets
    tree = ET.parse(xliff)
    translations = {f"{UUID_A}_title": "물 마시기", f"{UUID_A}_body": "지금 <b>시작</b> & 휴식."}
    for unit in tree.getroot().iter(f"{{{NS20['x']}}}unit"):
        unit.find("x:segment/x:target", NS20).text = translations[unit.get("id")]
    tree.write(xliff, encoding="UTF-8", xml_declaration=True)

    back = tmp_path / "out" / "translated.json"
    main(["to-json", str(xliff), str(back), "--engine", "builtin"])

    assert json.loads(back.read_text(encoding="utf-8")) == [
        {"title": "물 마시기", "body": "지금 <b>시작</b> & 휴식.", "uuid": UUID_A},
    ]


def test_consolidate(tmp_path, capsys):
    """Test 2: consolidate writes XLIFF 1.2 and reports counts and warnings."""
    source = tmp_path / "source.json"
    target = tmp_path / "target.json"
    source.write_text(json.dumps([
        {"uuid": "X", "title": "A", "body": "B"},
        {"uuid": "Y", "title": "C", "body": "D"},
    ]), encoding="utf-8")
    target.write_text(json.dumps([{"uuid": "X", "title": "가", "body": "나"}]), encoding="utf-8")
    output = tmp_path / "consolidated.xliff"

    main(["consolidate", str(source), str(target), str(output), "en", "ko"])

    report = json.loads(capsys.readouterr().out)
    assert report["stats"]["translation_units"] == 2
    assert report["warnings"] == ["No target translation found for UUID: Y"]
    assert 'target-language="ko"' in output.read_text(encoding="utf-8")


def test_consolidate_translatable_fields_option(tmp_path, capsys):
    """Test 3: --translatable-fields limits the consolidated fields."""
    source = tmp_path / "source.json"
    target = tmp_path / "target.json"
    source.write_text(json.dumps([{"uuid": "X", "title": "A", "body": "B"}]), encoding="utf-8")
    target.write_text(json.dumps([{"uuid": "X", "title": "가", "body": "나"}]), encoding="utf-8")

    main(["consolidate", str(source), str(target), str(tmp_path / "o.xliff"), "--translatable-fields", "body"])

    report = json.loads(capsys.readouterr().out)
    assert report["fields"] == ["body"]
    assert report["stats"]["translation_units"] == 1


def test_validation_error_exit_code(tmp_path, capsys):
    """Test 4: Object input exits 1 with a JSON error and no output file."""
    source = tmp_path / "obj.json"
    source.write_text('{"uuid": "X"}', encoding="utf-8")
    output = tmp_path / "out.xliff"

    assert run_failing(["to-xliff", str(source), str(output), "--engine", "builtin"]) == 1

    error = json.loads(capsys.readouterr().err)
    assert error["error_type"] == "VALIDATION_ERROR"
    assert not output.exists()


def test_missing_input_exit_code(tmp_path, capsys):
    """Test 5: Missing input exits 1 with FILE_NOT_FOUND."""
    code = run_failing(["consolidate", str(tmp_path / "a.json"), str(tmp_path / "b.json"), str(tmp_path / "o.xliff")])
    assert code == 1
    assert json.loads(capsys.readouterr().err)["error_type"] == "FILE_NOT_FOUND"


@pytest.mark.parametrize("argv", [
    ["to-xliff", "only-input.json"],
    ["to-json", "a.xliff", "b.json", "en", "ko", "extra"],
    ["consolidate", "s.json", "t.json"],
])
def test_usage_errors_exit_1(argv, capsys):
    """Test 6: Wrong argument counts print usage and exit 1."""
    assert run_failing(argv) == 1
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "USAGE_ERROR" in err


def test_no_command_exit_1(capsys):
    """Test 7: No subcommand prints help and exits 1."""
    assert run_failing([]) == 1


def test_engines(capsys):
    """Test 8: engines lists json2xliff and builtin."""
    main(["engines"])
    report = json.loads(capsys.readouterr().out)
    assert [e["name"] for e in report["engines"]] == ["json2xliff", "builtin"]


def test_config_file(tmp_path, source_json, capsys):
    """Test 9: Config file selects the engine and target language."""
    config = tmp_path / "xliffconv.yaml"
    config.write_text("target_lang: ja\nengine: builtin\n", encoding="utf-8")
    xliff = tmp_path / "out.xliff"

    main(["to-xliff", str(source_json), str(xliff), "--config", str(config)])

    report = json.loads(capsys.readouterr().out)
    assert report["engine"] == "builtin"
    assert report["languages"] == {"source": "en", "target": "ja"}
    assert ET.parse(xliff).getroot().get("trgLang") == "ja"


def test_consolidate_rejects_fields_option(tmp_path, capsys):
    """Test 10: consolidate has no --fields option; it is a usage error, not silently ignored."""
    source = tmp_path / "source.json"
    target = tmp_path / "target.json"
    source.write_text(json.dumps([{"uuid": "X", "title": "A", "body": "B"}]), encoding="utf-8")
    target.write_text(json.dumps([{"uuid": "X", "title": "가", "body": "나"}]), encoding="utf-8")
    output = tmp_path / "o.xliff"

    assert run_failing(["consolidate", str(source), str(target), str(output), "--fields", "title"]) == 1

    assert "USAGE_ERROR" in capsys.readouterr().err
    assert not output.exists()


def test_language_codes_before_options(tmp_path, source_json, capsys):
    """Test 11: Language codes given before options override the defaults."""
    xliff = tmp_path / "out.xliff"
    main(["to-xliff", str(source_json), str(xliff), "en", "ja", "--engine", "builtin"])

    report = json.loads(capsys.readouterr().out)
    assert report["languages"] == {"source": "en", "target": "ja"}
    assert ET.parse(xliff).getroot().get("trgLang") == "ja"


def test_config_boolean_language_exit_code(tmp_path, capsys):
    """Test 12: An unquoted `target_lang: no` exits 1 with CONFIG_ERROR and writes nothing."""
    source = tmp_path / "source.json"
    target = tmp_path / "target.json"
    source.write_text(json.dumps([{"uuid": "X", "title": "A", "body": "B"}]), encoding="utf-8")
    target.write_text(json.dumps([{"uuid": "X", "title": "A", "body": "B"}]), encoding="utf-8")
    config = tmp_path / "xliffconv.yaml"
    config.write_text("target_lang: no\n", encoding="utf-8")
    output = tmp_path / "o.xliff"

    assert run_failing(["consolidate", str(source), str(target), str(output), "--config", str(config)]) == 1

    error = json.loads(capsys.readouterr().err)
    assert error["error_type"] == "CONFIG_ERROR"
    assert 'target_lang: "no"' in error["suggestion"]
    assert not output.exists()
