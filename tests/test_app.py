from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from colecta import sheets
from colecta.roster import ingest_rows

APP = str(Path(__file__).resolve().parent.parent / "colecta_app.py")


@pytest.fixture
def guardados():
    return []


@pytest.fixture
def app(monkeypatch, raw_rows, guardados):
    monkeypatch.setattr(sheets, "open_spreadsheet", lambda info, name: object())
    monkeypatch.setattr(sheets, "load_ledger", lambda spreadsheet, policy: ingest_rows(raw_rows, policy))
    monkeypatch.setattr(sheets, "get_worksheet", lambda spreadsheet, title: title)
    monkeypatch.setattr(sheets, "save_roster", lambda ws, roster: guardados.append((ws, roster.copy())))

    at = AppTest.from_file(APP, default_timeout=30)
    at.secrets["gcp_service_account"] = {}
    at.secrets["colecta"] = {"permitir_pagos": True}
    return at


def _markdown(at):
    return " ".join(m.value for m in at.markdown)


def test_board_shows_total_collected(app):
    app.run()
    assert not app.exception
    assert "$65.000" in _markdown(app)


def test_saved_payment_refreshes_totals(app, guardados):
    app.run()
    app.number_input[0].set_value(5)
    app.number_input[1].set_value(30000)
    next(b for b in app.button if b.label == "Guardar pago").click()
    app.run()

    assert not app.exception
    assert "$95.000" in _markdown(app)
    assert [s.value for s in app.success] == ["Pago registrado correctamente."]
    ws, saved = guardados[-1]
    assert ws == "registro"
    assert saved.set_index("id").loc[5, "monto_pagado"] == 30000


def test_unknown_participant_is_reported(app, guardados):
    app.run()
    app.number_input[0].set_value(99)
    next(b for b in app.button if b.label == "Guardar pago").click()
    app.run()

    assert [e.value for e in app.error] == ["No existe el participante 99."]
    assert guardados == []
