import pytest

from colecta.roster import ingest_rows


@pytest.fixture
def raw_rows():
    return [
        {"Apellido": "Ortiz", "Nombre": "Victor", "Enero": "10.000", "Febrero": "10.000", "Marzo": "", "Inscriptos": "2"},
        {"Apellido": "Pérez", "Nombre": "María", "Enero": "10M", "Febrero": None, "Marzo": None, "Inscriptos": 1},
        {"Apellido": "Gómez", "Nombre": "Juan", "Enero": "5.000", "Febrero": "", "Marzo": "", "Inscriptos": ""},
        {"Apellido": "Ramírez", "Nombre": "Carlos", "Enero": 10000, "Febrero": 10000, "Marzo": 10000, "Inscriptos": "3"},
        {"Apellido": "Silva", "Nombre": "Marcos", "Enero": "abc", "Febrero": "", "Marzo": "", "Inscriptos": None},
    ]


@pytest.fixture
def roster(raw_rows):
    return ingest_rows(raw_rows)
