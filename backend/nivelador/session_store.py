from __future__ import annotations
import json
import logging

from pydantic import ValidationError
from sqlalchemy.orm import Session as DbSession

from .models import SavedSession
from .schemas import Session


logger = logging.getLogger(__name__)

SESSION_KEY = "evaluacion_desempenos"


def load_session(db: DbSession, key: str = SESSION_KEY) -> Session:
	row = db.get(SavedSession, key)
	if row is None or not row.payload:
		return Session()
	try:
		return Session.model_validate(json.loads(row.payload))
	except (ValueError, TypeError, ValidationError) as exc:
		# Malformed snapshot: start over with an empty session
		logger.debug("Discarding malformed saved session %s: %s", key, exc)
		return Session()


def save_session(db: DbSession, session: Session, key: str = SESSION_KEY) -> Session:
	row = db.get(SavedSession, key)
	payload = session.model_dump_json()
	if row is None:
		row = SavedSession(key=key, payload=payload)
	else:
		row.payload = payload
	db.add(row)
	db.commit()
	return session


def clear_session(db: DbSession, key: str = SESSION_KEY) -> None:
	row = db.get(SavedSession, key)
	if row is not None:
		db.delete(row)
		db.commit()
