"""Load the desempeños spreadsheet into the local database.

Run before starting the API (see ``start.sh``)::

	python -m nivelador.load_desempenos [path/to/desempenos.xlsx]

The grados and desempenos tables are dropped and rebuilt on every run.
"""
from __future__ import annotations
import logging
import sys
import unicodedata
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
from sqlalchemy.orm import Session

from .db import Base, SessionLocal, engine
from .models import Desempeno, Grado
from .settings import settings


logger = logging.getLogger(__name__)

# Accepted spreadsheet headers (normalised) per column
COLUMN_ALIASES: Dict[str, tuple] = {
	"grado": ("grado", "grade", "nivel educativo"),
	"codigo": ("codigo", "cod", "code"),
	"descripcion": ("descripcion", "desempeno", "desempenos", "description"),
	"categoria": ("categoria", "competencia", "category"),
}
REQUIRED_COLUMNS = ("grado", "descripcion")


def _normalize_header(value) -> str:
	text = unicodedata.normalize("NFKD", str(value)).encode("ascii", "ignore").decode("ascii")
	return " ".join(text.lower().split())


def _clean(value) -> Optional[str]:
	if value is None or pd.isna(value):
		return None
	text = str(value).strip()
	# Integer-like codes come back from Excel as floats
	if text.endswith(".0") and text[:-2].isdigit():
		text = text[:-2]
	return text or None


def resolve_columns(df: pd.DataFrame) -> Dict[str, str]:
	found: Dict[str, str] = {}
	normalized = {_normalize_header(c): c for c in df.columns}
	for field, aliases in COLUMN_ALIASES.items():
		for alias in aliases:
			if alias in normalized:
				found[field] = normalized[alias]
				break
	missing = [c for c in REQUIRED_COLUMNS if c not in found]
	if missing:
		raise ValueError(f"Spreadsheet is missing required columns: {', '.join(missing)}")
	return found


def read_desempenos(path: str | Path, sheet: Optional[str] = None) -> pd.DataFrame:
	path = Path(path)
	if not path.exists():
		raise FileNotFoundError(f"Desempeños spreadsheet not found: {path}")
	df = pd.read_excel(path, sheet_name=sheet if sheet else 0, engine="openpyxl")
	columns = resolve_columns(df)
	out = pd.DataFrame({field: df[col].map(_clean) for field, col in columns.items()})
	for field in COLUMN_ALIASES:
		if field not in out.columns:
			out[field] = None
	out = out.dropna(subset=list(REQUIRED_COLUMNS))
	return out.reset_index(drop=True)


def store_desempenos(db: Session, df: pd.DataFrame) -> int:
	grados: Dict[str, Grado] = {}
	count = 0
	per_grado: Dict[str, int] = {}
	for record in df.to_dict(orient="records"):
		nombre = record["grado"]
		grado = grados.get(nombre)
		if grado is None:
			grado = Grado(nombre=nombre, orden=len(grados))
			db.add(grado)
			grados[nombre] = grado
		orden = per_grado.get(nombre, 0)
		per_grado[nombre] = orden + 1
		db.add(Desempeno(
			grado=grado,
			codigo=record.get("codigo"),
			descripcion=record["descripcion"],
			categoria=record.get("categoria"),
			orden=orden,
		))
		count += 1
	db.commit()
	return count


def recreate_tables() -> None:
	tables = [Base.metadata.tables["desempenos"], Base.metadata.tables["grados"]]
	Base.metadata.drop_all(bind=engine, tables=tables)
	Base.metadata.create_all(bind=engine)


def load(path: str | Path | None = None, sheet: Optional[str] = None) -> int:
	path = path or settings.desempenos_file
	df = read_desempenos(path, sheet or settings.desempenos_sheet)
	recreate_tables()
	db = SessionLocal()
	try:
		count = store_desempenos(db, df)
	finally:
		db.close()
	logger.info("Loaded %d desempeños from %s", count, path)
	return count


def main(argv: list[str] | None = None) -> int:
	logging.basicConfig(level=settings.log_level.upper())
	argv = sys.argv[1:] if argv is None else argv
	path = argv[0] if argv else None
	try:
		load(path)
	except (FileNotFoundError, ValueError) as exc:
		logger.error("%s", exc)
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
