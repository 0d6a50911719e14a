from dataclasses import dataclass, field

# ============================================================
# COLECTA
# ============================================================

CUOTA_MONTO = 10000
NUM_CUOTAS = 3

PROYECTO = "Proyecto 330"

# Mes en que se paga la primera cuota (1 = enero); vence al mes siguiente
PROGRAMA_MES_INICIO = 1

# ============================================================
# REPORTE
# ============================================================

FILAS_POR_PAGINA = 50

# ============================================================
# GOOGLE SHEETS
# ============================================================

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]

SHEET_NAME = "ColectaDB"
WORKSHEET_ORIGEN = "participantes"
WORKSHEET_REGISTRO = "registro"

COLS_ROSTER = ["id", "nombre", "apellido", "nombre_completo", "monto_pagado", "inscriptos"]


MESES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)
ORDENES_NOMBRE = ("nombre_apellido", "apellido_nombre")


def meses_de_cuotas(mes_inicio: int = PROGRAMA_MES_INICIO) -> tuple:
    """Month names of the cuotas, starting at ``mes_inicio`` (1 = enero)."""
    return tuple(MESES[(mes_inicio - 1 + i) % 12] for i in range(NUM_CUOTAS))


@dataclass(frozen=True)
class IngestPolicy:
    """How raw sheet rows become roster rows.

    ``orden_nombre`` is either ``"nombre_apellido"`` or ``"apellido_nombre"``
    and only applies when the sheet has separate name columns.
    ``conservar_ids`` keeps the ``id`` column of a sheet already written by
    this app instead of numbering rows again.
    """

    orden_nombre: str = "nombre_apellido"
    ordenar: bool = True
    meses_cuotas: tuple = field(default_factory=meses_de_cuotas)
    conservar_ids: bool = False

    def __post_init__(self):
        if self.orden_nombre not in ORDENES_NOMBRE:
            raise ValueError(
                f"orden_nombre debe ser uno de {ORDENES_NOMBRE}, no {self.orden_nombre!r}"
            )
