from __future__ import annotations
import csv
import io
from datetime import date
from typing import List, Optional

from .levels import LEVEL_ORDER
from .schemas import Session, Student
from .settings import settings


NOT_COMPUTED = "-"

IDENTITY_COLUMNS = ["N°", "Estudiante"]
FINAL_COLUMN = "Nivel Final"


def header_row(session: Session) -> List[str]:
	header = list(IDENTITY_COLUMNS)
	for level in session.ordered_levels():
		header.extend(f"{level.name} P{i + 1}" for i in range(len(level.questions)))
	header.extend(level.name for level in session.ordered_levels())
	header.append(FINAL_COLUMN)
	return header


def student_row(session: Session, index: int, student: Student) -> list:
	row: list = [index, student.nombre]
	for level in session.ordered_levels():
		answers = student.answers_for(level.key)
		row.extend(answers[i] if i < len(answers) else "" for i in range(len(level.questions)))
	for key in LEVEL_ORDER:
		record = (student.puntajes or {}).get(key)
		row.append(record.fraction if record is not None else NOT_COMPUTED)
	row.append(student.nivel_final or NOT_COMPUTED)
	return row


def build_csv(session: Session) -> Optional[str]:
	"""Render the session as CSV text, or None when there is no student."""
	if not session.estudiantes:
		return None
	buf = io.StringIO()
	# Strings quoted, the sequential index left bare
	writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
	writer.writerow(header_row(session))
	for idx, student in enumerate(session.estudiantes, start=1):
		writer.writerow(student_row(session, idx, student))
	return buf.getvalue()


def export_filename(today: Optional[date] = None) -> str:
	today = today or date.today()
	return f"{settings.export_prefix}_{today.isoformat()}.csv"
