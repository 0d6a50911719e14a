import logging
from datetime import datetime

import streamlit as st

from colecta import config
from colecta.consultas import FiltroCuotas, filter_roster
from colecta.cuotas import add_cuota_columns
from colecta.montos import format_monto
from colecta.morosidad import morosos_mask, overdue_cuotas
from colecta.pdf import render_pdf
from colecta.reporte import layout_report
from colecta.roster import registrar_pago, toggle_cuota
from colecta.sheets import (
    FuenteDatosError,
    get_worksheet,
    load_ledger,
    open_spreadsheet,
    save_roster,
)
from colecta.totales import aggregate_totals

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# ============================================================
# CONFIG STREAMLIT
# ============================================================
st.set_page_config(page_title=config.PROYECTO, page_icon="🧊", layout="wide")

opciones = st.secrets.get("colecta", {})
SHEET_NAME = opciones.get("sheet_name", config.SHEET_NAME)
PERMITIR_PAGOS = bool(opciones.get("permitir_pagos", False))
try:
    POLICY = config.IngestPolicy(
        orden_nombre=opciones.get("orden_nombre", "nombre_apellido"),
        ordenar=bool(opciones.get("ordenar", True)),
    )
except ValueError as e:
    st.error(f"Configuración inválida en secrets: {e}")
    st.stop()

st.markdown(
    f"""
    <div style="text-align:center;">
        <h1 style="margin-bottom:0;">{config.PROYECTO}</h1>
        <div style="color:#9CA3AF;">
            Colecta {config.NUM_CUOTAS} cuotas · {format_monto(config.CUOTA_MONTO)} por cuota
        </div>
    </div>
    """,
    unsafe_allow_html=True,
)

# ============================================================
# CARGA DE DATOS
# ============================================================

def load_roster():
    spreadsheet = open_spreadsheet(st.secrets["gcp_service_account"], SHEET_NAME)
    return load_ledger(spreadsheet, POLICY)


def save_registro(roster):
    spreadsheet = open_spreadsheet(st.secrets["gcp_service_account"], SHEET_NAME)
    save_roster(get_worksheet(spreadsheet, config.WORKSHEET_REGISTRO), roster)


recargar = st.sidebar.button("🔄 Recargar planilla")
if recargar or "roster" not in st.session_state:
    try:
        st.session_state["roster"] = load_roster()
    except FuenteDatosError as e:
        st.error(str(e))
        st.stop()

roster = st.session_state["roster"]

if "aviso" in st.session_state:
    st.success(st.session_state.pop("aviso"))
overdue = overdue_cuotas(datetime.today().date())
totales = aggregate_totals(roster)

# ============================================================
# BUSQUEDA Y FILTROS
# ============================================================

col_q, col_f, col_t = st.columns([3, 1, 1])
with col_q:
    query = st.text_input("Buscar", placeholder="Buscar por nombre, apellido o ID")
with col_f:
    filtro = st.selectbox(
        "Cuotas pagadas",
        options=list(FiltroCuotas),
        format_func=lambda f: f.etiqueta,
    )
with col_t:
    st.markdown(
        f"""
        <div style="background-color:#111827;padding:10px 15px;border-radius:10px;
                    text-align:center;border:1px solid #374151;">
            <div style="font-size:13px;color:#9CA3AF;">Recaudado</div>
            <div style="font-size:22px;font-weight:bold;color:white;">
                {format_monto(totales["total_recaudado"])}
            </div>
            <div style="font-size:12px;color:#9CA3AF;">
                {totales["total_inscriptos"]} inscriptos
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )

filtered = filter_roster(roster, query, filtro)

if overdue:
    vencidas = ", ".join(str(k) for k in sorted(overdue))
    st.caption(f"Cuotas vencidas: {vencidas}. Los participantes atrasados aparecen en rojo.")

# ============================================================
# REPORTE PDF
# ============================================================

layout = layout_report(filtered, overdue, config.FILAS_POR_PAGINA)
st.sidebar.download_button(
    "📄 Descargar reporte PDF",
    data=render_pdf(layout, config.PROYECTO, totales),
    file_name=f"colecta_{datetime.today().strftime('%Y-%m-%d')}.pdf",
    mime="application/pdf",
)
st.sidebar.caption(f"{layout.total_filas} participantes · {layout.total_paginas} páginas")

# ============================================================
# REGISTRAR PAGOS (ADMIN)
# ============================================================

if PERMITIR_PAGOS:
    with st.expander("💳 Registrar pago"):
        col_a, col_b = st.columns(2)
        with col_a:
            pid = st.number_input("ID del participante", min_value=1, step=1)
        with col_b:
            monto = st.number_input("Monto total pagado", min_value=0, step=config.CUOTA_MONTO)

        if st.button("Guardar pago"):
            if registrar_pago(roster, int(pid), int(monto)):
                try:
                    save_registro(roster)
                except FuenteDatosError as e:
                    st.error(str(e))
                else:
                    st.session_state["aviso"] = "Pago registrado correctamente."
                    st.rerun()
            else:
                st.error(f"No existe el participante {int(pid)}.")

st.markdown("---")

# ============================================================
# LISTA DE PARTICIPANTES
# ============================================================

if filtered.empty:
    st.info("Ningún participante coincide con la búsqueda.")
else:
    filas = add_cuota_columns(filtered)
    filas["moroso"] = morosos_mask(filas, overdue)
    for _, row in filas.iterrows():
        borde = "#B91C1C" if row["moroso"] else "#374151"
        col_n, col_c = st.columns([3, 2])
        with col_n:
            st.markdown(
                f"""
                <div style="background-color:#111827;padding:10px 15px;border-radius:10px;
                            margin-bottom:6px;border:1px solid {borde};">
                    <span style="color:#9CA3AF;">#{row['id']}</span>
                    <span style="font-size:16px;font-weight:bold;color:white;margin-left:8px;">
                        {row['nombre_completo']}
                    </span>
                </div>
                """,
                unsafe_allow_html=True,
            )
        with col_c:
            cols_cuota = st.columns(config.NUM_CUOTAS)
            for i in range(config.NUM_CUOTAS):
                with cols_cuota[i]:
                    st.progress(float(row[f"cuota_{i + 1}"]), text=f"Cuota {i + 1}")
                    if PERMITIR_PAGOS and st.button(
                        "Marcar", key=f"toggle_{row['id']}_{i}", help="Pagar o anular hasta esta cuota"
                    ):
                        toggle_cuota(roster, row["id"], i)
                        try:
                            save_registro(roster)
                        except FuenteDatosError as e:
                            st.error(str(e))
                        else:
                            st.rerun()
