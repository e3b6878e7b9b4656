from __future__ import annotations
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .levels import ANSWER_KEYS, FINAL_LABELS, LEVEL_NAMES, LEVEL_ORDER


def _normalize_key(value: Optional[str]) -> str:
	key = (value or "").strip().upper()
	if key and key not in ANSWER_KEYS:
		raise ValueError(f"answer key must be one of {ANSWER_KEYS} or empty")
	return key


class Question(BaseModel):
	descripcion: str = ""
	desempeno_id: Optional[int] = None
	clave: str = Field(default="", description="Correct answer A-D, empty when unset")

	@field_validator("clave", mode="before")
	@classmethod
	def _check_clave(cls, v):
		return _normalize_key(v)


class Level(BaseModel):
	key: str
	name: str = ""
	questions: List[Question] = Field(default_factory=list)

	@field_validator("key")
	@classmethod
	def _check_key(cls, v: str) -> str:
		if v not in LEVEL_ORDER:
			raise ValueError(f"level key must be one of {LEVEL_ORDER}")
		return v

	@model_validator(mode="after")
	def _default_name(self):
		if not self.name:
			self.name = LEVEL_NAMES[self.key]
		return self


class ScoreRecord(BaseModel):
	correct: int = 0
	total: int = 0
	percentage: float = 0.0

	@property
	def fraction(self) -> str:
		return f"{self.correct}/{self.total}"


class Student(BaseModel):
	nombre: str
	respuestas: Dict[str, List[str]] = Field(default_factory=dict)
	puntajes: Optional[Dict[str, ScoreRecord]] = None
	nivel_final: Optional[str] = None

	@field_validator("nombre")
	@classmethod
	def _check_nombre(cls, v: str) -> str:
		v = v.strip()
		if not v:
			raise ValueError("nombre is required")
		return v

	@field_validator("respuestas")
	@classmethod
	def _check_respuestas(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
		out: Dict[str, List[str]] = {}
		for key, answers in v.items():
			if key not in LEVEL_ORDER:
				raise ValueError(f"unknown level key: {key}")
			out[key] = [_normalize_key(a) for a in answers]
		return out

	@field_validator("nivel_final")
	@classmethod
	def _check_nivel_final(cls, v: Optional[str]) -> Optional[str]:
		if v is not None and v not in FINAL_LABELS.values():
			raise ValueError("nivel_final is not a known level label")
		return v

	def answers_for(self, level_key: str) -> List[str]:
		return self.respuestas.get(level_key, [])

	def clear_results(self) -> None:
		self.puntajes = None
		self.nivel_final = None


def default_levels() -> Dict[str, Level]:
	return {key: Level(key=key) for key in LEVEL_ORDER}


class Session(BaseModel):
	"""Everything the teacher edits during one assessment."""

	competencia: str = ""
	grado_id: Optional[int] = None
	niveles: Dict[str, Level] = Field(default_factory=default_levels)
	estudiantes: List[Student] = Field(default_factory=list)

	@field_validator("niveles", mode="before")
	@classmethod
	def _fill_levels(cls, v):
		if v is None:
			v = {}
		if not isinstance(v, dict):
			raise ValueError("niveles must be an object keyed by level")
		v = dict(v)
		for key in v:
			if key not in LEVEL_ORDER:
				raise ValueError(f"unknown level key: {key}")
		filled = {}
		for key in LEVEL_ORDER:
			level = v.get(key)
			if level is None:
				level = {"key": key}
			elif isinstance(level, dict):
				level = {**level, "key": key}
			elif isinstance(level, Level) and level.key != key:
				raise ValueError(f"level stored under {key} has key {level.key}")
			filled[key] = level
		return filled

	def ordered_levels(self) -> List[Level]:
		return [self.niveles[key] for key in LEVEL_ORDER]

	def question_count(self) -> int:
		return sum(len(level.questions) for level in self.niveles.values())

	def clear_results(self) -> None:
		for student in self.estudiantes:
			student.clear_results()


# ---- request / response bodies ----

class CompetenciaUpdate(BaseModel):
	competencia: str = ""
	grado_id: Optional[int] = None


class LevelUpdate(BaseModel):
	name: Optional[str] = None
	questions: List[Question] = Field(default_factory=list)


class StudentInput(BaseModel):
	nombre: str
	respuestas: Dict[str, List[str]] = Field(default_factory=dict)


class LevelCount(BaseModel):
	key: str
	label: str
	count: int


class Statistics(BaseModel):
	total: int
	pending: int = 0
	counts: Dict[str, int]


class ChartSeries(BaseModel):
	labels: List[str]
	counts: List[int]
	percentages: List[int]
	colors: List[str]


class StatisticsResponse(BaseModel):
	statistics: Statistics
	levels: List[LevelCount]
	chart: ChartSeries


class GradoOut(BaseModel):
	id: int
	nombre: str


class DesempenoOut(BaseModel):
	id: int
	grado_id: int
	codigo: Optional[str] = None
	descripcion: str
	categoria: Optional[str] = None
