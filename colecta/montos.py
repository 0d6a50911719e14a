import logging
import math
import re

import pandas as pd

logger = logging.getLogger(__name__)

# "5M", "12 m": digits before the unit letter count as thousands
_MILES_RE = re.compile(r"^\s*(\d+)\s*[mM]\s*$")
_NO_NUMERICO_RE = re.compile(r"[^0-9.\-]")


def normalize_amount(raw) -> int:
    """Parse one raw sheet cell into a non-negative integer amount.

    Never raises: anything that cannot be read as a number becomes 0.
    """
    if raw is None:
        return 0
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        if isinstance(raw, float) and (math.isnan(raw) or math.isinf(raw)):
            return 0
        return max(0, int(raw))
    try:
        if pd.isna(raw):
            return 0
    except (TypeError, ValueError):
        pass

    texto = str(raw)
    m = _MILES_RE.match(texto)
    if m:
        return int(m.group(1)) * 1000

    limpio = texto.replace(".", "").replace(",", ".")
    limpio = _NO_NUMERICO_RE.sub("", limpio)
    try:
        valor = float(limpio)
    except ValueError:
        if texto.strip():
            logger.debug("Monto ilegible %r, se toma como 0", texto)
        return 0
    if math.isnan(valor) or math.isinf(valor):
        return 0
    return max(0, int(valor))


def format_monto(value) -> str:
    """Format an amount the way the sheet shows it: ``$10.000``."""
    try:
        val = int(value)
    except (ValueError, TypeError):
        return str(value)
    return "$" + f"{val:,}".replace(",", ".")
