from dataclasses import dataclass
from datetime import date, datetime

import pandas as pd
from dateutil.relativedelta import relativedelta

from colecta.config import PROGRAMA_MES_INICIO
from colecta.cuotas import cuotas_completas


@dataclass(frozen=True)
class CalendarioCuotas:
    """Due calendar of the colecta.

    Cuota ``k`` is overdue from ``inicio + offsets_meses[k - 1]`` months on.
    """

    inicio: date
    offsets_meses: tuple = (1, 2, 3)

    def vencimiento(self, cuota: int) -> date:
        return self.inicio + relativedelta(months=self.offsets_meses[cuota - 1])


def calendario_default(today: date) -> CalendarioCuotas:
    return CalendarioCuotas(inicio=date(today.year, PROGRAMA_MES_INICIO, 1))


def overdue_cuotas(today, calendario: CalendarioCuotas = None) -> frozenset:
    if isinstance(today, datetime):
        today = today.date()
    if calendario is None:
        calendario = calendario_default(today)
    return frozenset(
        k
        for k in range(1, len(calendario.offsets_meses) + 1)
        if today >= calendario.vencimiento(k)
    )


def is_moroso(monto_pagado, overdue) -> bool:
    completas = cuotas_completas(monto_pagado)
    return any(completas < k for k in overdue)


def morosos_mask(df: pd.DataFrame, overdue) -> pd.Series:
    """Boolean Series aligned with ``df``: True for delinquent rows."""
    return df["monto_pagado"].apply(lambda m: is_moroso(m, overdue)).astype(bool)
