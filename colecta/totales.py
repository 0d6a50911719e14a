import pandas as pd


def aggregate_totals(roster: pd.DataFrame) -> dict:
    """Totals over the whole roster. Pass the unfiltered roster, always."""
    if roster.empty:
        return {"total_recaudado": 0, "total_inscriptos": 0, "participantes": 0}

    inscriptos = roster["inscriptos"] if "inscriptos" in roster.columns else pd.Series(0, index=roster.index)
    return {
        "total_recaudado": int(pd.to_numeric(roster["monto_pagado"], errors="coerce").fillna(0).sum()),
        "total_inscriptos": int(pd.to_numeric(inscriptos, errors="coerce").fillna(0).sum()),
        "participantes": int(len(roster)),
    }
