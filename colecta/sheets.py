import logging
from dataclasses import replace

import gspread
import pandas as pd
from google.oauth2.service_account import Credentials
from gspread_dataframe import get_as_dataframe, set_with_dataframe

from colecta.config import COLS_ROSTER, SCOPES, SHEET_NAME, WORKSHEET_ORIGEN, WORKSHEET_REGISTRO, IngestPolicy
from colecta.roster import ingest_dataframe

logger = logging.getLogger(__name__)


class FuenteDatosError(Exception):
    """The spreadsheet could not be opened, read or written."""


def open_spreadsheet(service_account_info, sheet_name: str = SHEET_NAME):
    creds = Credentials.from_service_account_info(service_account_info, scopes=SCOPES)
    client = gspread.authorize(creds)
    try:
        return client.open(sheet_name)
    except gspread.exceptions.SpreadsheetNotFound as e:
        raise FuenteDatosError(f"No se encontró la planilla '{sheet_name}'") from e
    except gspread.exceptions.APIError as e:
        raise FuenteDatosError(f"Error de Google Sheets al abrir '{sheet_name}': {e}") from e


def get_worksheet(spreadsheet, title: str):
    try:
        return spreadsheet.worksheet(title)
    except gspread.exceptions.WorksheetNotFound as e:
        raise FuenteDatosError(f"La planilla no tiene la hoja '{title}'") from e


def load_frame(worksheet) -> pd.DataFrame:
    """Worksheet as a DataFrame without empty rows or unnamed columns."""
    try:
        df = get_as_dataframe(worksheet, evaluate_formulas=True, header=0)
    except gspread.exceptions.APIError as e:
        raise FuenteDatosError(f"No se pudo leer la hoja: {e}") from e
    df = df.dropna(how="all")
    df = df.loc[:, [c for c in df.columns if not str(c).startswith("Unnamed")]]
    logger.info("Hoja leída: %d filas", len(df))
    return df


def load_raw_rows(worksheet):
    """Raw rows of a worksheet, one dict per non-empty row, header as keys."""
    return load_frame(worksheet).to_dict(orient="records")


def load_ledger(spreadsheet, policy: IngestPolicy = IngestPolicy()) -> pd.DataFrame:
    """Roster with the payments recorded so far.

    Reads the ``registro`` worksheet, keeping its ids, when it has rows;
    otherwise ingests the ``participantes`` worksheet from scratch.
    """
    try:
        registro = load_frame(get_worksheet(spreadsheet, WORKSHEET_REGISTRO))
    except FuenteDatosError as e:
        logger.warning("Sin registro de pagos (%s), se usa la hoja de origen", e)
        registro = pd.DataFrame()

    if not registro.empty:
        logger.info("Cargando registro de pagos: %d filas", len(registro))
        return ingest_dataframe(registro, replace(policy, conservar_ids=True))

    origen = load_frame(get_worksheet(spreadsheet, WORKSHEET_ORIGEN))
    return ingest_dataframe(origen, policy)


def save_roster(worksheet, roster: pd.DataFrame):
    """Replace the worksheet contents with the canonical roster columns."""
    try:
        worksheet.clear()
        set_with_dataframe(worksheet, roster[COLS_ROSTER])
    except gspread.exceptions.APIError as e:
        raise FuenteDatosError(f"No se pudo guardar el registro: {e}") from e
    logger.info("Registro guardado: %d participantes", len(roster))
