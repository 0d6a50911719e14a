import pandas as pd

from colecta.config import COLS_ROSTER, IngestPolicy, meses_de_cuotas
from colecta.roster import (
    ingest_dataframe,
    ingest_rows,
    normalize_header,
    parse_row,
    registrar_pago,
    toggle_cuota,
)


def test_normalize_header():
    assert normalize_header(" Cuota_1 ") == "cuota 1"
    assert normalize_header("INSCRIPTOS") == "inscriptos"
    assert normalize_header("Nombre  y  Apellido") == "nombre y apellido"
    assert normalize_header("1º Cuota") == "1 cuota"
    assert normalize_header("Teléfono") == "telefono"


def test_ingest_sums_month_columns(roster):
    by_id = roster.set_index("id")
    assert by_id.loc[1, "monto_pagado"] == 20000
    assert by_id.loc[2, "monto_pagado"] == 10000
    assert by_id.loc[3, "monto_pagado"] == 5000
    assert by_id.loc[4, "monto_pagado"] == 30000
    assert by_id.loc[5, "monto_pagado"] == 0
    assert by_id.loc[1, "inscriptos"] == 2
    assert by_id.loc[3, "inscriptos"] == 0


def test_ingest_keeps_every_row_and_columns(raw_rows, roster):
    assert len(roster) == len(raw_rows)
    assert list(roster.columns) == COLS_ROSTER
    assert sorted(roster["id"]) == [1, 2, 3, 4, 5]


def test_ingest_sorts_by_first_name_without_renumbering(roster):
    assert roster["id"].tolist() == [4, 3, 5, 2, 1]
    assert roster["nombre_completo"].tolist()[0] == "Carlos Ramírez"


def test_ingest_without_sorting_keeps_row_order(raw_rows):
    roster = ingest_rows(raw_rows, IngestPolicy(ordenar=False))
    assert roster["id"].tolist() == [1, 2, 3, 4, 5]


def test_name_order_policy():
    row = {"nombre": "Ana", "apellido": "Díaz", "total": "20.000"}
    assert parse_row(row, 1)["nombre_completo"] == "Ana Díaz"
    last_first = parse_row(row, 1, IngestPolicy(orden_nombre="apellido_nombre"))
    assert last_first["nombre_completo"] == "Díaz Ana"
    assert last_first["nombre"] == "Ana"
    assert last_first["apellido"] == "Díaz"


def test_single_name_column_is_split():
    parsed = parse_row({"Nombre completo": "  Paula   Mora Ruiz ", "Total": "10.000"}, 7)
    assert parsed["nombre_completo"] == "Paula Mora Ruiz"
    assert parsed["nombre"] == "Paula"
    assert parsed["apellido"] == "Mora Ruiz"
    assert parsed["id"] == 7


def test_total_column_wins_over_installments():
    parsed = parse_row({"Nombre": "Ana", "Total Pagado": "25.000", "Cuota 1": "10.000"}, 1)
    assert parsed["monto_pagado"] == 25000


def test_blank_total_falls_back_to_installments():
    parsed = parse_row({"Nombre": "Ana", "Total": "", "Cuota 1": "10.000", "2da cuota": "5.000"}, 1)
    assert parsed["monto_pagado"] == 15000


def test_paid_count_column():
    assert parse_row({"name": "x", "cuotasPaid": 2}, 1)["monto_pagado"] == 20000
    assert parse_row({"name": "x", "Cuotas pagadas": "7"}, 1)["monto_pagado"] == 30000


def test_unparseable_row_still_yields_participant():
    roster = ingest_rows([{"columna rara": "???"}, {}])
    assert len(roster) == 2
    assert roster["monto_pagado"].tolist() == [0, 0]
    assert roster["nombre_completo"].tolist() == ["", ""]


def test_ingest_empty():
    roster = ingest_rows([])
    assert roster.empty
    assert list(roster.columns) == COLS_ROSTER


def test_ingest_is_a_fresh_snapshot(raw_rows, roster):
    registrar_pago(roster, 5, 30000)
    again = ingest_rows(raw_rows)
    assert again.set_index("id").loc[5, "monto_pagado"] == 0


def test_ingest_dataframe_drops_empty_rows():
    df = pd.DataFrame(
        {
            "Nombre": ["Ana Díaz", None, "Luisa López"],
            "Total": ["10.000", None, 20000.0],
        }
    )
    roster = ingest_dataframe(df, IngestPolicy(ordenar=False))
    assert roster["nombre_completo"].tolist() == ["Ana Díaz", "Luisa López"]
    assert roster["monto_pagado"].tolist() == [10000, 20000]
    assert roster["id"].tolist() == [1, 2]


def test_registrar_pago_sets_exact_amount(roster):
    assert registrar_pago(roster, 3, "25.000")
    assert roster.set_index("id").loc[3, "monto_pagado"] == 25000
    assert registrar_pago(roster, 3, 10000)
    assert roster.set_index("id").loc[3, "monto_pagado"] == 10000
    assert registrar_pago(roster, 3, -50)
    assert roster.set_index("id").loc[3, "monto_pagado"] == 0


def test_registrar_pago_unknown_id(roster):
    before = roster.copy()
    assert not registrar_pago(roster, 99, 10000)
    pd.testing.assert_frame_equal(roster, before)


def test_toggle_cuota(roster):
    # participant 1 has two full cuotas
    assert toggle_cuota(roster, 1, 2)
    assert roster.set_index("id").loc[1, "monto_pagado"] == 30000
    assert toggle_cuota(roster, 1, 1)
    assert roster.set_index("id").loc[1, "monto_pagado"] == 10000
    assert toggle_cuota(roster, 1, 0)
    assert roster.set_index("id").loc[1, "monto_pagado"] == 0
    assert toggle_cuota(roster, 1, 9)
    assert roster.set_index("id").loc[1, "monto_pagado"] == 30000
    assert not toggle_cuota(roster, 42, 0)


def test_month_headers_follow_policy_months():
    policy = IngestPolicy(meses_cuotas=meses_de_cuotas(9))
    row = {"Nombre": "Ana", "Septiembre": "10.000", "Octubre": "5.000", "Enero": "10.000"}
    assert parse_row(row, 1, policy)["monto_pagado"] == 15000


def test_saved_ids_are_kept():
    rows = [
        {"id": 7, "nombre": "Zoe", "apellido": "", "nombre_completo": "Zoe", "monto_pagado": 20000, "inscriptos": 1},
        {"id": 2.0, "nombre": "Ana", "apellido": "Díaz", "nombre_completo": "Ana Díaz", "monto_pagado": 0, "inscriptos": 0},
    ]
    roster = ingest_rows(rows, IngestPolicy(conservar_ids=True))
    by_id = roster.set_index("id")
    assert roster["id"].tolist() == [2, 7]
    assert by_id.loc[7, "monto_pagado"] == 20000
    assert by_id.loc[7, "nombre_completo"] == "Zoe"
    assert by_id.loc[2, "inscriptos"] == 0


def test_saved_ids_ignored_by_default():
    roster = ingest_rows([{"id": 7, "nombre": "Zoe", "total": 0}])
    assert roster["id"].tolist() == [1]


def test_missing_or_repeated_saved_ids_get_new_ones():
    rows = [
        {"id": 4, "nombre": "Ana"},
        {"id": 4, "nombre": "Luisa"},
        {"id": "", "nombre": "Marcos"},
    ]
    roster = ingest_rows(rows, IngestPolicy(conservar_ids=True, ordenar=False))
    assert roster["id"].tolist() == [4, 5, 6]
