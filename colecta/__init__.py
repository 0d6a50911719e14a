"""Colecta de cuotas: ledger normalization, queries and printable report."""

from colecta.config import CUOTA_MONTO, NUM_CUOTAS, IngestPolicy
from colecta.consultas import FiltroCuotas, filter_roster
from colecta.cuotas import cuota_fills, cuotas_completas
from colecta.montos import normalize_amount
from colecta.morosidad import CalendarioCuotas, is_moroso, overdue_cuotas
from colecta.reporte import layout_report
from colecta.roster import ingest_rows, registrar_pago, toggle_cuota
from colecta.totales import aggregate_totals

__version__ = "0.1.0"
