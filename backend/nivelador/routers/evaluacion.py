from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session as DbSession

from ..db import get_db
from ..export import build_csv, export_filename
from ..levels import LEVEL_ORDER
from ..schemas import CompetenciaUpdate, Level, LevelUpdate, Session, StatisticsResponse, Student, StudentInput
from ..scoring import aggregate, build_statistics, calculate
from ..session_store import clear_session, load_session, save_session


router = APIRouter(prefix="/evaluacion", tags=["evaluacion"])


def _student_index(session: Session, index: int) -> int:
	if index < 0 or index >= len(session.estudiantes):
		raise HTTPException(status_code=404, detail="estudiante not found")
	return index


@router.get("", response_model=Session)
def get_session(db: DbSession = Depends(get_db)):
	return load_session(db)


@router.put("", response_model=Session)
def replace_session(session: Session, db: DbSession = Depends(get_db)):
	return save_session(db, session)


@router.delete("", response_model=Session)
def reset_session(db: DbSession = Depends(get_db)):
	clear_session(db)
	return Session()


@router.put("/competencia", response_model=Session)
def update_competencia(req: CompetenciaUpdate, db: DbSession = Depends(get_db)):
	session = load_session(db)
	session.competencia = req.competencia
	session.grado_id = req.grado_id
	return save_session(db, session)


@router.put("/niveles/{level_key}", response_model=Session)
def update_level(level_key: str, req: LevelUpdate, db: DbSession = Depends(get_db)):
	if level_key not in LEVEL_ORDER:
		raise HTTPException(status_code=404, detail=f"level must be one of {LEVEL_ORDER}")
	session = load_session(db)
	current = session.niveles[level_key]
	session.niveles[level_key] = Level(key=level_key, name=req.name or current.name, questions=req.questions)
	# Scores no longer match the configuration
	session.clear_results()
	return save_session(db, session)


@router.post("/estudiantes", response_model=Session)
def add_student(req: StudentInput, db: DbSession = Depends(get_db)):
	session = load_session(db)
	session.estudiantes.append(Student(nombre=req.nombre, respuestas=req.respuestas))
	return save_session(db, session)


@router.put("/estudiantes/{index}", response_model=Session)
def update_student(index: int, req: StudentInput, db: DbSession = Depends(get_db)):
	session = load_session(db)
	idx = _student_index(session, index)
	session.estudiantes[idx] = Student(nombre=req.nombre, respuestas=req.respuestas)
	return save_session(db, session)


@router.delete("/estudiantes/{index}", response_model=Session)
def remove_student(index: int, db: DbSession = Depends(get_db)):
	session = load_session(db)
	idx = _student_index(session, index)
	session.estudiantes.pop(idx)
	return save_session(db, session)


@router.post("/calcular", response_model=Session)
def calculate_results(db: DbSession = Depends(get_db)):
	session = load_session(db)
	calculate(session)
	return save_session(db, session)


@router.get("/estadisticas", response_model=StatisticsResponse)
def get_statistics(db: DbSession = Depends(get_db)):
	session = load_session(db)
	return build_statistics(aggregate(session.estudiantes))


@router.get("/exportar")
def export_csv(db: DbSession = Depends(get_db)):
	session = load_session(db)
	content = build_csv(session)
	if content is None:
		return Response(status_code=204)
	filename = export_filename()
	return Response(
		content=content.encode("utf-8"),
		media_type="text/csv; charset=utf-8",
		headers={"Content-Disposition": f'attachment; filename="{filename}"'},
	)
