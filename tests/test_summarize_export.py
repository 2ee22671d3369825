import importlib.util
import json
from datetime import datetime
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[1] / 'scripts' / 'summarize_export.py'


def _load_script():
    spec = importlib.util.spec_from_file_location('summarize_export', SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_cli_prints_view(tmp_path, capsys):
    now = datetime.now()
    tx_path = tmp_path / 'transactions.json'
    tx_path.write_text(json.dumps([
        {'id': 1, 'amount': 2000, 'type': 'income', 'date': now.timestamp(), 'categoryId': 9},
        {'id': 2, 'amount': 500, 'type': 'expense', 'date': now.timestamp(), 'categoryId': 1},
        {'id': 3, 'amount': 10, 'type': 'expense', 'date': 'unknown', 'categoryId': 1},
    ]))
    categories_path = tmp_path / 'categories.json'
    categories_path.write_text(json.dumps([{'id': 1, 'name': 'Food', 'color': '#F97316'}]))

    exit_code = _load_script().main(str(tx_path), None, str(categories_path), 'USD', 6)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert 'Income:       $2,000.00' in out
    assert 'Food' in out
    assert 'Skipped 1 transaction(s) with unreadable dates' in out
