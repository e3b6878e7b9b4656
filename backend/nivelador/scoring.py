"""Scoring, leveling and aggregation for an assessment session.

Everything here is pure: functions take the configured levels and the
roster and return new values (``calculate`` updates the students it is
given in place, replacing any previous result).
"""
from __future__ import annotations
from typing import Dict, Iterable, List

from .levels import (
	DEFAULT_LEVEL,
	FINAL_LABELS,
	LEVEL_COLORS,
	LEVEL_NAMES,
	LEVEL_ORDER,
	PASS_THRESHOLD,
	level_for_label,
	priority_order,
)
from .schemas import (
	ChartSeries,
	Level,
	LevelCount,
	ScoreRecord,
	Session,
	Statistics,
	StatisticsResponse,
	Student,
)


def score_level(level: Level, answers: List[str]) -> ScoreRecord:
	total = len(level.questions)
	correct = 0
	for idx, question in enumerate(level.questions):
		if idx >= len(answers):
			break
		# An unset clave or an empty answer is never correct
		if question.clave and answers[idx] == question.clave:
			correct += 1
	percentage = (100.0 * correct / total) if total > 0 else 0.0
	return ScoreRecord(correct=correct, total=total, percentage=percentage)


def score_student(niveles: Dict[str, Level], student: Student) -> Dict[str, ScoreRecord]:
	return {key: score_level(niveles[key], student.answers_for(key)) for key in LEVEL_ORDER}


def final_level(scores: Dict[str, ScoreRecord]) -> str:
	"""Return the final level key.

	Levels are checked from the highest down and the first one that has
	questions, at least one correct answer and reaches PASS_THRESHOLD wins,
	even when a lower level scored better.
	"""
	for key in priority_order():
		record = scores.get(key)
		if record is None:
			continue
		if record.total > 0 and record.correct > 0 and record.percentage >= PASS_THRESHOLD:
			return key
	return DEFAULT_LEVEL


def calculate(session: Session) -> List[Student]:
	for student in session.estudiantes:
		scores = score_student(session.niveles, student)
		student.puntajes = scores
		student.nivel_final = FINAL_LABELS[final_level(scores)]
	return session.estudiantes


def aggregate(students: Iterable[Student]) -> Statistics:
	counts = {key: 0 for key in LEVEL_ORDER}
	total = 0
	pending = 0
	for student in students:
		total += 1
		key = level_for_label(student.nivel_final) if student.nivel_final else None
		if key is None:
			pending += 1
			continue
		counts[key] += 1
	return Statistics(total=total, pending=pending, counts=counts)


def percentage_of_total(count: int, total: int) -> int:
	if total <= 0:
		return 0
	return round(100 * count / total)


def build_statistics(stats: Statistics) -> StatisticsResponse:
	levels = [LevelCount(key=key, label=FINAL_LABELS[key], count=stats.counts[key]) for key in LEVEL_ORDER]
	chart = ChartSeries(
		labels=[LEVEL_NAMES[key] for key in LEVEL_ORDER],
		counts=[stats.counts[key] for key in LEVEL_ORDER],
		percentages=[percentage_of_total(stats.counts[key], stats.total) for key in LEVEL_ORDER],
		colors=[LEVEL_COLORS[key] for key in LEVEL_ORDER],
	)
	return StatisticsResponse(statistics=stats, levels=levels, chart=chart)
