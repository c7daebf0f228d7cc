"""
Tests for the command-line interface.
"""

import json

import pytest

from ..cli import main

pytestmark = pytest.mark.usefixtures("clean_environment")

METADATA = {"author": "Test Author", "setName": "Base Set", "version": "1"}


def _pokemon(name, number, hp, damage="30", retreat=1):
    return {
        "name": name,
        "cardNumber": number,
        "pokemonNumber": number.zfill(3),
        "stage": "BASIC",
        "hp": hp,
        "retreatCost": retreat,
        "attacks": [{"name": "Hit", "energyCost": ["COLORLESS"], "damage": damage}],
    }


@pytest.fixture
def set_file(tmp_path):
    path = tmp_path / "set.json"
    path.write_text(json.dumps({
        "metadata": METADATA,
        "cards": [
            _pokemon("Charmander", "4", 60),
            _pokemon("Magikarp", "129", 30, damage="10", retreat=3),
            {"name": "Potion", "cardNumber": "94", "cardType": "TRAINER"},
        ],
    }), encoding="utf-8")
    return path


@pytest.fixture
def broken_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({
        "metadata": METADATA,
        "cards": [_pokemon("Pikachu", "25", 40), {"name": "Nameless HP", "cardNumber": "1"}],
    }), encoding="utf-8")
    return path


class TestStrengthCommand:
    """Tests for `cardlab strength`."""

    def test_report(self, set_file, capsys):
        main(["strength", str(set_file)])
        out = capsys.readouterr().out
        assert "Cards loaded: 3" in out
        assert "Cards scored: 2" in out
        assert "Balance categories:" in out
        assert "Strongest 2:" in out
        # Strongest listed first
        assert out.index("Charmander") < out.index("Magikarp")

    def test_json(self, set_file, capsys):
        main(["strength", str(set_file), "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert [entry["name"] for entry in payload] == ["Charmander", "Magikarp"]
        assert payload[0]["totalStrength"] == pytest.approx(47.0)
        assert payload[0]["balanceCategory"] == "balanced"
        assert payload[0]["cardId"] == "test-author-base-set-v1-charmander--4"

    def test_top_zero_hides_listings(self, set_file, capsys):
        main(["strength", str(set_file), "--top", "0"])
        out = capsys.readouterr().out
        assert "Strongest" not in out
        assert "Averages:" in out

    def test_skipped_cards_reported(self, broken_file, capsys):
        main(["strength", str(broken_file)])
        assert "Cards skipped: 1" in capsys.readouterr().out

    def test_data_dir_fallback(self, set_file, monkeypatch, capsys):
        monkeypatch.setenv("CARDLAB_DATA_DIR", str(set_file.parent))
        main(["strength"])
        assert "Cards loaded: 3" in capsys.readouterr().out

    def test_no_files(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["strength"])
        assert exc_info.value.code == 1
        assert "No card files given" in capsys.readouterr().out


class TestValidateCommand:
    """Tests for `cardlab validate`."""

    def test_valid(self, set_file, capsys):
        main(["validate", str(set_file)])
        assert "Valid cards: 3" in capsys.readouterr().out

    def test_invalid_exits_nonzero(self, broken_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["validate", str(broken_file)])
        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "Valid cards: 1" in out
        assert "Errors:" in out
        assert "Nameless HP" in out

    def test_warnings_listed(self, tmp_path, capsys):
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({
            "metadata": METADATA,
            "cards": [dict(_pokemon("Pikachu", "25", 40), flavor="Electric")],
        }), encoding="utf-8")
        main(["--log-level", "DEBUG", "validate", str(path)])
        out = capsys.readouterr().out
        assert "Warnings:" in out
        assert "flavor" in out


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "usage: cardlab" in capsys.readouterr().out
