"""Unit tests for loading list sources from YAML."""

from pathlib import Path

from ctscan.lists import load_lists


class TestLoadLists:
    def test_parses_entries_in_order(self, tmp_path: Path) -> None:
        path = tmp_path / "lists.yml"
        path.write_text(
            "lists:\n"
            "  - name: Alpha\n"
            "    url: https://x.com/i/lists/111\n"
            "  - name: Beta\n"
            "    url: https://x.com/i/lists/222\n"
        )
        lists = load_lists(path)
        assert [s.name for s in lists] == ["Alpha", "Beta"]
        assert lists[1].url == "https://x.com/i/lists/222"

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_lists(tmp_path / "nope.yml") == []

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "lists.yml"
        path.write_text("")
        assert load_lists(path) == []

    def test_skips_malformed_entries(self, tmp_path: Path) -> None:
        path = tmp_path / "lists.yml"
        path.write_text(
            "lists:\n"
            "  - just-a-string\n"
            "  - name: NoUrl\n"
            "  - name: Blank\n"
            "    url: '  '\n"
            "  - name: Good\n"
            "    url: https://x.com/i/lists/333\n"
        )
        assert [s.name for s in load_lists(path)] == ["Good"]
