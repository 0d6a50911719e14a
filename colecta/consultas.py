from enum import Enum

import pandas as pd

from colecta.cuotas import cuotas_completas


class FiltroCuotas(Enum):
    TODOS = 0
    AL_MENOS_1 = 1
    AL_MENOS_2 = 2
    TRES_O_MAS = 3

    @property
    def etiqueta(self) -> str:
        return {
            FiltroCuotas.TODOS: "Todos",
            FiltroCuotas.AL_MENOS_1: "1+ cuotas",
            FiltroCuotas.AL_MENOS_2: "2+ cuotas",
            FiltroCuotas.TRES_O_MAS: "3 cuotas",
        }[self]


def parse_filtro(value) -> FiltroCuotas:
    """Accept an enum member, its name, its threshold or its label.

    Anything unrecognized means no filter.
    """
    if isinstance(value, FiltroCuotas):
        return value
    for filtro in FiltroCuotas:
        if value == filtro.value or value == filtro.name or value == filtro.etiqueta:
            return filtro
    return FiltroCuotas.TODOS


def filter_roster(roster: pd.DataFrame, search: str = "", filtro=FiltroCuotas.TODOS) -> pd.DataFrame:
    """Rows of ``roster`` matching the search text and the cuota filter.

    The search is a case-insensitive substring of the full name, or an exact
    match of the participant id. Roster order is preserved and the roster
    itself is left untouched.
    """
    filtro = parse_filtro(filtro)
    search = "" if search is None else str(search)
    query = search.lower()
    query_id = search.strip()

    nombres = roster["nombre_completo"].astype(str).str.lower()
    mask = nombres.str.contains(query, regex=False) | (roster["id"].astype(str) == query_id)

    if filtro is not FiltroCuotas.TODOS:
        completas = roster["monto_pagado"].apply(cuotas_completas)
        mask &= completas >= filtro.value

    return roster[mask].copy()
