import json

import pytest

from taxcompare.main import main


def test_cli_json_output(capsys):
    main(["--income", "200000", "--json"])
    body = json.loads(capsys.readouterr().out)
    assert body["advantage"]["amount"] == 21530.34
    assert body["inputs"]["expenses"] == 100000.0


def test_cli_honours_default_draw_env(monkeypatch, capsys):
    monkeypatch.setenv("DEFAULT_EXPENSE_DRAW", "50,000")
    main(["--income", "$200,000", "--json", "--no-ei"])
    body = json.loads(capsys.readouterr().out)
    assert body["corporate"]["salary"] == 50000.0
    assert body["personal"]["ei"] == 0.0


def test_cli_table_output(capsys):
    main(["--income", "$200,000", "--expenses", "100000", "--no-color", "--details"])
    out = capsys.readouterr().out
    assert "Tax comparison" in out
    assert "Federal basic personal amount credit" in out
    assert "Corporate structure provides a tax advantage of $21,530" in out


def test_cli_unknown_jurisdiction_exits():
    with pytest.raises(SystemExit, match="Unknown jurisdiction ZZ"):
        main(["--income", "1000", "--jurisdiction", "ZZ"])
