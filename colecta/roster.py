import logging
import re
import unicodedata

import pandas as pd

from colecta.config import COLS_ROSTER, CUOTA_MONTO, NUM_CUOTAS, IngestPolicy
from colecta.cuotas import cuotas_completas
from colecta.montos import normalize_amount

logger = logging.getLogger(__name__)

# ============================================================
# ENCABEZADOS RECONOCIDOS
# ============================================================

HEADERS_NOMBRE = {"nombre", "nombres"}
HEADERS_APELLIDO = {"apellido", "apellidos"}
HEADERS_NOMBRE_COMPLETO = {"nombre completo", "nombre y apellido", "apellido y nombre", "participante"}
HEADERS_TOTAL = {"total", "total pagado", "monto total", "monto pagado", "pagado"}
HEADERS_INSCRIPTOS = {"inscriptos", "inscritos", "cantidad inscriptos", "registrados"}
HEADERS_CUOTAS_PAGADAS = {"cuotas pagadas", "cuotaspaid"}
HEADERS_ID = {"id"}

_ORDINALES = (
    ("1ra cuota", "primera cuota", "1 cuota"),
    ("2da cuota", "segunda cuota", "2 cuota"),
    ("3ra cuota", "tercera cuota", "3 cuota"),
)


def normalize_header(header) -> str:
    """``" Cuota_1 "`` -> ``"cuota 1"``, ``"Inscriptos"`` -> ``"inscriptos"``."""
    texto = str(header).replace("°", " ").replace("º", " ").replace("ª", " ")
    texto = unicodedata.normalize("NFKD", texto)
    texto = "".join(c for c in texto if not unicodedata.combining(c))
    texto = re.sub(r"[\s_\-]+", " ", texto.lower()).strip()
    return texto


def cuota_headers(policy: IngestPolicy):
    """One set of accepted spellings per cuota, in cuota order."""
    headers = []
    for i in range(NUM_CUOTAS):
        n = i + 1
        spellings = {f"cuota {n}", f"cuota{n}"}
        if i < len(_ORDINALES):
            spellings.update(_ORDINALES[i])
        if i < len(policy.meses_cuotas):
            spellings.add(normalize_header(policy.meses_cuotas[i]))
        headers.append(spellings)
    return headers


def _is_blank(value) -> bool:
    if value is None:
        return True
    try:
        if pd.isna(value):
            return True
    except (TypeError, ValueError):
        return False
    return str(value).strip() == ""


def _text(value) -> str:
    return "" if _is_blank(value) else " ".join(str(value).split())


def _pick(row: dict, spellings):
    """First non-blank value among the columns spelled as ``spellings``."""
    for key, value in row.items():
        if key in spellings and not _is_blank(value):
            return value
    return None


def _has_any(row: dict, spellings) -> bool:
    return any(key in spellings for key in row)


def _parse_nombre(row: dict, policy: IngestPolicy):
    nombre = _text(_pick(row, HEADERS_NOMBRE))
    apellido = _text(_pick(row, HEADERS_APELLIDO))

    if nombre and not apellido:
        first, _, rest = nombre.partition(" ")
        return first, rest, nombre

    if nombre or apellido:
        if policy.orden_nombre == "apellido_nombre":
            completo = f"{apellido} {nombre}"
        else:
            completo = f"{nombre} {apellido}"
        return nombre, apellido, completo.strip()

    completo = _text(_pick(row, HEADERS_NOMBRE_COMPLETO))
    first, _, rest = completo.partition(" ")
    return first, rest, completo


def _parse_monto(row: dict, policy: IngestPolicy) -> int:
    total = _pick(row, HEADERS_TOTAL)
    if total is not None:
        return normalize_amount(total)

    cuotas = cuota_headers(policy)
    if any(_has_any(row, spellings) for spellings in cuotas):
        return sum(normalize_amount(_pick(row, spellings)) for spellings in cuotas)

    if _has_any(row, HEADERS_CUOTAS_PAGADAS):
        pagadas = normalize_amount(_pick(row, HEADERS_CUOTAS_PAGADAS))
        return max(0, min(NUM_CUOTAS, pagadas)) * CUOTA_MONTO

    return 0


def parse_row(raw: dict, pid: int, policy: IngestPolicy = IngestPolicy()) -> dict:
    """One canonical roster row out of one raw sheet row. Never fails."""
    row = {normalize_header(k): v for k, v in dict(raw).items()}
    nombre, apellido, completo = _parse_nombre(row, policy)
    return {
        "id": pid,
        "nombre": nombre,
        "apellido": apellido,
        "nombre_completo": completo,
        "monto_pagado": _parse_monto(row, policy),
        "inscriptos": normalize_amount(_pick(row, HEADERS_INSCRIPTOS)),
    }


def sort_key(nombre_completo) -> str:
    first, _, _ = str(nombre_completo).strip().partition(" ")
    return first.casefold()


def _assign_saved_ids(records, rows):
    """Reuse the ``id`` cell of each row; missing or repeated ids get new ones."""
    saved = []
    for raw in rows:
        row = {normalize_header(k): v for k, v in dict(raw).items()}
        saved.append(normalize_amount(_pick(row, HEADERS_ID)))

    usados = set()
    siguiente = max(saved, default=0) + 1
    for record, pid in zip(records, saved):
        if pid < 1 or pid in usados:
            logger.debug("Fila sin id válido (%s), se asigna %d", pid, siguiente)
            pid = siguiente
            siguiente += 1
        usados.add(pid)
        record["id"] = pid


def ingest_rows(rows, policy: IngestPolicy = IngestPolicy()) -> pd.DataFrame:
    """Build a fresh roster snapshot from raw sheet rows.

    Ids follow row order (1..N), or come from the ``id`` column when
    ``policy.conservar_ids`` is set, and are kept when the roster is sorted.
    Every input row yields exactly one participant.
    """
    rows = list(rows)
    records = [parse_row(raw, pid, policy) for pid, raw in enumerate(rows, start=1)]
    if policy.conservar_ids:
        _assign_saved_ids(records, rows)
    roster = pd.DataFrame(records, columns=COLS_ROSTER)
    roster = roster.astype({"id": int, "monto_pagado": int, "inscriptos": int})

    if policy.ordenar and not roster.empty:
        roster = roster.sort_values(
            "nombre_completo", key=lambda s: s.map(sort_key), kind="mergesort"
        )
    roster = roster.reset_index(drop=True)

    logger.info(
        "Planilla ingresada: %d participantes, %d sin pagos",
        len(roster),
        int((roster["monto_pagado"] == 0).sum()),
    )
    return roster


def ingest_dataframe(df: pd.DataFrame, policy: IngestPolicy = IngestPolicy()) -> pd.DataFrame:
    """Same as :func:`ingest_rows` for a frame read from the sheet."""
    df = df.dropna(how="all")
    return ingest_rows(df.to_dict(orient="records"), policy)


# ============================================================
# REGISTRO DE PAGOS
# ============================================================

def registrar_pago(roster: pd.DataFrame, pid, monto) -> bool:
    """Set the paid amount of participant ``pid`` to ``monto``, in place."""
    mask = roster["id"] == pid
    if not mask.any():
        logger.warning("Participante %s no existe, pago ignorado", pid)
        return False
    nuevo = normalize_amount(monto)
    roster.loc[mask, "monto_pagado"] = nuevo
    logger.info("Pago registrado: participante %s -> %d", pid, nuevo)
    return True


def toggle_cuota(roster: pd.DataFrame, pid, index: int) -> bool:
    """Click on cuota ``index`` (0-based): pay up to it, or unpay from it."""
    mask = roster["id"] == pid
    if not mask.any():
        logger.warning("Participante %s no existe, cuota ignorada", pid)
        return False
    index = max(0, min(NUM_CUOTAS - 1, int(index)))
    completas = cuotas_completas(roster.loc[mask, "monto_pagado"].iloc[0])
    nuevas = index if index < completas else index + 1
    return registrar_pago(roster, pid, nuevas * CUOTA_MONTO)
