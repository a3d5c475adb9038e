"""Tests for the command line interface."""

import json

import pytest

from blockport.cli import main


@pytest.fixture
def markup_file(tmp_path, columns_markup):
    path = tmp_path / "page.html"
    path.write_text(columns_markup, encoding="utf-8")
    return path


class TestCli:
    def test_builders(self, capsys):
        assert main(["builders"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 11
        assert lines[0].startswith("elementor")

    def test_parse(self, capsys, markup_file):
        assert main(["parse", "--file", str(markup_file)]) == 0
        tree = json.loads(capsys.readouterr().out)
        assert tree[0]["name"] == "columns"
        assert len(tree[0]["children"]) == 2

    def test_parse_to_file(self, tmp_path, markup_file):
        output = tmp_path / "tree.json"
        assert main(["parse", "--file", str(markup_file), "--max-depth", "1", "--output", str(output)]) == 0
        tree = json.loads(output.read_text(encoding="utf-8"))
        assert tree[0]["children"] == []

    def test_export(self, capsys, markup_file):
        assert main(["export", "--builder", "gutenberg,divi", "--file", str(markup_file)]) == 0
        results = json.loads(capsys.readouterr().out)
        assert list(results) == ["gutenberg", "divi"]
        assert results["gutenberg"]["success"] is True
        assert results["divi"]["format"] == "shortcode"
        assert results["divi"]["metadata"]["widget_count"] == 5

    def test_export_unknown_builder_fails(self, capsys, markup_file):
        assert main(["export", "--builder", "frontpage", "--file", str(markup_file)]) == 1
        results = json.loads(capsys.readouterr().out)
        assert results["frontpage"]["success"] is False

    def test_export_snapshot(self, capsys, tmp_path):
        path = tmp_path / "snapshot.json"
        payload = [
            {"tag": "h1", "text": "Title", "position": {"x": 0, "y": 0, "width": 800, "height": 40}},
            {"tag": "p", "text": "Body", "position": {"x": 0, "y": 100, "width": 800, "height": 20}},
        ]
        path.write_text(json.dumps(payload), encoding="utf-8")
        assert main(["export", "--builder", "elementor", "--snapshot", str(path)]) == 0
        results = json.loads(capsys.readouterr().out)
        assert results["elementor"]["metadata"]["conversion_method"] == "fallback"
        assert results["elementor"]["metadata"]["section_count"] == 2

    @pytest.mark.parametrize(
        "payload",
        [
            "{not json",
            '{"tag": "p"}',
            '[{"tag": "p", "position": {"x": "left"}}]',
        ],
    )
    def test_export_bad_snapshot_fails_cleanly(self, capsys, caplog, tmp_path, payload):
        path = tmp_path / "snapshot.json"
        path.write_text(payload, encoding="utf-8")
        assert main(["export", "--builder", "elementor", "--snapshot", str(path)]) == 1
        assert capsys.readouterr().out == ""
        assert "Could not load input" in caplog.text

    def test_export_missing_file_fails_cleanly(self, tmp_path):
        missing = tmp_path / "missing.json"
        assert main(["export", "--builder", "elementor", "--snapshot", str(missing)]) == 1

    def test_export_without_markup_fails(self, tmp_path):
        path = tmp_path / "plain.html"
        path.write_text('<div class="et_pb_section">x</div>', encoding="utf-8")
        assert main(["export", "--builder", "elementor", "--file", str(path)]) == 1

    def test_detect(self, capsys, markup_file):
        assert main(["detect", "--file", str(markup_file)]) == 0
        assert capsys.readouterr().out.strip() == "gutenberg"

    def test_config(self, capsys):
        assert main(["config"]) == 0
        assert "max_depth=10" in capsys.readouterr().out.splitlines()
