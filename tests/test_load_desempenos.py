"""Tests for the desempeños spreadsheet loader."""

import pandas as pd
import pytest

from nivelador import load_desempenos
from nivelador.models import Desempeno, Grado


@pytest.fixture
def workbook(tmp_path):
    path = tmp_path / "desempenos.xlsx"
    pd.DataFrame(
        {
            "Grado": ["1° Primaria", "1° Primaria", "2° Primaria", None],
            "Código": [101, 102, "M2-01", 999],
            "Desempeño": ["Cuenta hasta 20", "Compara cantidades", "Suma con canje", "Sin grado"],
            "Competencia": ["Cantidad", "Cantidad", "Cantidad", "Cantidad"],
        }
    ).to_excel(path, index=False)
    return path


def test_read_normalises_headers(workbook):
    df = load_desempenos.read_desempenos(workbook)
    assert list(df["grado"]) == ["1° Primaria", "1° Primaria", "2° Primaria"]
    assert list(df["codigo"]) == ["101", "102", "M2-01"]
    assert df.loc[0, "categoria"] == "Cantidad"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_desempenos.read_desempenos(tmp_path / "nope.xlsx")


def test_missing_required_column(tmp_path):
    path = tmp_path / "bad.xlsx"
    pd.DataFrame({"Grado": ["1°"], "Otro": ["x"]}).to_excel(path, index=False)
    with pytest.raises(ValueError, match="descripcion"):
        load_desempenos.read_desempenos(path)


def test_load_rebuilds_tables(db, workbook):
    assert load_desempenos.load(workbook) == 3
    assert load_desempenos.load(workbook) == 3
    db.expire_all()
    grados = db.query(Grado).order_by(Grado.orden).all()
    assert [g.nombre for g in grados] == ["1° Primaria", "2° Primaria"]
    assert [d.descripcion for d in grados[0].desempenos] == ["Cuenta hasta 20", "Compara cantidades"]
    assert db.query(Desempeno).count() == 3


def test_main_reports_errors(db, tmp_path):
    assert load_desempenos.main([str(tmp_path / "missing.xlsx")]) == 1


def test_main_loads_file(db, workbook):
    assert load_desempenos.main([str(workbook)]) == 0
