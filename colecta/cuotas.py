import pandas as pd

from colecta.config import CUOTA_MONTO, NUM_CUOTAS


def cuota_fills(monto_pagado):
    """Spread a cumulative paid amount over the cuotas, first one first.

    Returns one fraction in [0, 1] per cuota.
    """
    restante = max(0, int(monto_pagado))
    fills = []
    for _ in range(NUM_CUOTAS):
        fills.append(min(1.0, restante / CUOTA_MONTO))
        restante = max(0, restante - CUOTA_MONTO)
    return fills


def cuotas_completas(monto_pagado) -> int:
    return max(0, min(NUM_CUOTAS, int(monto_pagado) // CUOTA_MONTO))


def add_cuota_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Copy of ``df`` with ``cuota_1..n`` fill columns and ``cuotas_completas``."""
    out = df.copy()
    fills = out["monto_pagado"].apply(cuota_fills)
    for i in range(NUM_CUOTAS):
        out[f"cuota_{i + 1}"] = fills.apply(lambda f, i=i: f[i]).astype(float)
    out["cuotas_completas"] = out["monto_pagado"].apply(cuotas_completas).astype(int)
    return out
