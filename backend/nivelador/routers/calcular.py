from fastapi import APIRouter

from ..schemas import Session, StatisticsResponse
from ..scoring import aggregate, build_statistics, calculate

router = APIRouter(prefix="/calcular", tags=["scoring"])


@router.post("", response_model=Session)
def calculate_session(session: Session):
	# Nothing is stored; results are computed on the posted copy
	calculate(session)
	return session


@router.post("/estadisticas", response_model=StatisticsResponse)
def calculate_statistics(session: Session):
	calculate(session)
	return build_statistics(aggregate(session.estudiantes))
