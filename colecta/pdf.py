import io
import logging
from datetime import datetime

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

from colecta.config import CUOTA_MONTO, NUM_CUOTAS, PROYECTO
from colecta.montos import format_monto
from colecta.reporte import FilaReporte, InicioPagina, PiePagina, ReportLayout, Resumen

logger = logging.getLogger(__name__)

# ======================================================================
# PALETA / MEDIDAS
# ======================================================================

_AZUL = colors.HexColor("#2E4B8F")
_VERDE = colors.HexColor("#548235")
_ROJO_CLARO = colors.HexColor("#F8D7DA")
_GRIS = colors.HexColor("#D9D9D9")

_PAGE_W, _PAGE_H = A4
_MARGIN = 1.5 * cm
_TOP = _PAGE_H - _MARGIN - 2.2 * cm  # first row baseline, under the header
ALTO_FILA = 0.48 * cm

_COL_INDICE = _MARGIN
_COL_ID = _MARGIN + 1.2 * cm
_COL_NOMBRE = _MARGIN + 2.4 * cm
_COL_CUOTAS = _PAGE_W - _MARGIN - NUM_CUOTAS * 1.3 * cm
_ANCHO_CUOTA = 1.1 * cm


def _header(c: canvas.Canvas, titulo: str, totales: dict, generado: str):
    c.setFillColor(_AZUL)
    c.setFont("Helvetica-Bold", 14)
    c.drawString(_MARGIN, _PAGE_H - _MARGIN, titulo)
    c.setFillColor(colors.black)
    c.setFont("Helvetica", 9)
    c.drawString(
        _MARGIN,
        _PAGE_H - _MARGIN - 0.6 * cm,
        f"{NUM_CUOTAS} cuotas · {format_monto(CUOTA_MONTO)} por cuota · "
        f"Recaudado: {format_monto(totales.get('total_recaudado', 0))} · "
        f"Inscriptos: {totales.get('total_inscriptos', 0)}",
    )
    c.drawRightString(_PAGE_W - _MARGIN, _PAGE_H - _MARGIN, generado)

    y = _PAGE_H - _MARGIN - 1.4 * cm
    c.setFont("Helvetica-Bold", 9)
    c.drawString(_COL_INDICE, y, "N°")
    c.drawString(_COL_ID, y, "ID")
    c.drawString(_COL_NOMBRE, y, "Participante")
    for i in range(NUM_CUOTAS):
        c.drawString(_COL_CUOTAS + i * 1.3 * cm, y, f"Cuota {i + 1}")
    c.line(_MARGIN, y - 0.15 * cm, _PAGE_W - _MARGIN, y - 0.15 * cm)


def _fila(c: canvas.Canvas, fila: FilaReporte):
    y = _TOP - fila.slot * ALTO_FILA
    if fila.moroso:
        c.setFillColor(_ROJO_CLARO)
        c.rect(_MARGIN - 0.1 * cm, y - 0.12 * cm, _PAGE_W - 2 * _MARGIN + 0.2 * cm, ALTO_FILA, stroke=0, fill=1)

    c.setFillColor(colors.black)
    c.setFont("Helvetica", 8)
    c.drawString(_COL_INDICE, y, str(fila.indice))
    c.drawString(_COL_ID, y, str(fila.participante_id))
    c.drawString(_COL_NOMBRE, y, fila.nombre[:60])

    alto = ALTO_FILA * 0.6
    for i, fill in enumerate(fila.fills):
        x = _COL_CUOTAS + i * 1.3 * cm
        c.setFillColor(_GRIS)
        c.rect(x, y - 0.05 * cm, _ANCHO_CUOTA, alto, stroke=0, fill=1)
        if fill > 0:
            c.setFillColor(_VERDE)
            c.rect(x, y - 0.05 * cm, _ANCHO_CUOTA * fill, alto, stroke=0, fill=1)


def render_pdf(layout: ReportLayout, titulo: str = PROYECTO, totales: dict = None) -> bytes:
    """Draw a report layout on A4 pages and return the PDF bytes."""
    totales = totales or {}
    generado = datetime.now().strftime("%d-%m-%Y %H:%M")
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(titulo)

    pagina_abierta = False
    for ins in layout.instrucciones:
        if isinstance(ins, InicioPagina):
            _header(c, titulo, totales, generado)
            pagina_abierta = True
        elif isinstance(ins, FilaReporte):
            _fila(c, ins)
        elif isinstance(ins, PiePagina):
            c.setFillColor(colors.black)
            c.setFont("Helvetica", 8)
            c.drawCentredString(_PAGE_W / 2, _MARGIN / 2, f"Página {ins.pagina} de {ins.total_paginas}")
            if ins.pagina < ins.total_paginas:
                c.showPage()
                pagina_abierta = False
        elif isinstance(ins, Resumen):
            if not pagina_abierta:
                _header(c, titulo, totales, generado)
            c.setFillColor(colors.black)
            c.setFont("Helvetica-Bold", 9)
            c.drawString(
                _MARGIN,
                _MARGIN,
                f"Total: {ins.total_filas} participantes en {ins.total_paginas} páginas",
            )

    c.showPage()
    c.save()
    logger.info("Reporte PDF generado: %d páginas, %d filas", layout.total_paginas, layout.total_filas)
    return buf.getvalue()
