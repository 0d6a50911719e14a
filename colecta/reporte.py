"""Page layout of the printable colecta report.

``layout_report`` only decides what goes on each page: it returns plain
instruction records that a renderer (see ``colecta.pdf``) turns into a
document. The same filtered roster and overdue set always produce the same
instructions.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import pandas as pd

from colecta.config import FILAS_POR_PAGINA
from colecta.cuotas import cuota_fills
from colecta.morosidad import is_moroso


@dataclass(frozen=True)
class InicioPagina:
    pagina: int


@dataclass(frozen=True)
class FilaReporte:
    pagina: int
    slot: int
    indice: int
    participante_id: int
    nombre: str
    fills: Tuple[float, ...]
    moroso: bool


@dataclass(frozen=True)
class PiePagina:
    pagina: int
    total_paginas: int


@dataclass(frozen=True)
class Resumen:
    total_paginas: int
    total_filas: int


@dataclass(frozen=True)
class ReportLayout:
    instrucciones: tuple
    total_paginas: int
    total_filas: int

    def filas(self, pagina=None):
        return [
            ins
            for ins in self.instrucciones
            if isinstance(ins, FilaReporte) and (pagina is None or ins.pagina == pagina)
        ]


def layout_report(filtered: pd.DataFrame, overdue=frozenset(), filas_por_pagina: int = FILAS_POR_PAGINA) -> ReportLayout:
    capacidad = max(1, int(filas_por_pagina))
    total_filas = len(filtered)
    total_paginas = math.ceil(total_filas / capacidad)

    filas = []
    for pos, row in enumerate(filtered.itertuples(index=False)):
        monto = int(row.monto_pagado)
        filas.append(
            FilaReporte(
                pagina=pos // capacidad + 1,
                slot=pos % capacidad,
                indice=pos + 1,
                participante_id=int(row.id),
                nombre=str(row.nombre_completo),
                fills=tuple(cuota_fills(monto)),
                moroso=is_moroso(monto, overdue),
            )
        )

    instrucciones = []
    for pagina in range(1, total_paginas + 1):
        instrucciones.append(InicioPagina(pagina))
        instrucciones.extend(filas[(pagina - 1) * capacidad : pagina * capacidad])
        instrucciones.append(PiePagina(pagina, total_paginas))
    instrucciones.append(Resumen(total_paginas, total_filas))

    return ReportLayout(tuple(instrucciones), total_paginas, total_filas)
