from __future__ import annotations
from typing import Dict, List


# Evaluation order, lowest to highest
LEVEL_ORDER: List[str] = ["pre_inicio", "inicio", "en_proceso", "satisfactorio", "destacado"]

LEVEL_NAMES: Dict[str, str] = {
	"pre_inicio": "Pre-Inicio",
	"inicio": "Inicio",
	"en_proceso": "En Proceso",
	"satisfactorio": "Satisfactorio",
	"destacado": "Logro Destacado",
}

FINAL_LABELS: Dict[str, str] = {
	"pre_inicio": "PRE INICIO",
	"inicio": "INICIO",
	"en_proceso": "EN PROCESO",
	"satisfactorio": "SATISFACTORIO",
	"destacado": "LOGRO DESTACADO",
}

# Bar colours used by the statistics chart
LEVEL_COLORS: Dict[str, str] = {
	"pre_inicio": "#ef4444",
	"inicio": "#f97316",
	"en_proceso": "#eab308",
	"satisfactorio": "#22c55e",
	"destacado": "#3b82f6",
}

DEFAULT_LEVEL = "pre_inicio"

# Minimum percentage for a level to count as reached
PASS_THRESHOLD = 60

# Valid answer keys; "" means unset / unanswered
ANSWER_KEYS: List[str] = ["A", "B", "C", "D"]


def priority_order() -> List[str]:
	return list(reversed(LEVEL_ORDER))


def level_for_label(label: str) -> str | None:
	for key, value in FINAL_LABELS.items():
		if value == label:
			return key
	return None
