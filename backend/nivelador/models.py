from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship
from .db import Base


class Grado(Base):
	__tablename__ = "grados"
	id = Column(Integer, primary_key=True, autoincrement=True)
	nombre = Column(String(128), nullable=False, unique=True, index=True)
	# Position of the grade in the source spreadsheet
	orden = Column(Integer, default=0, nullable=False)

	desempenos = relationship("Desempeno", back_populates="grado", order_by="Desempeno.orden")


class Desempeno(Base):
	__tablename__ = "desempenos"
	id = Column(Integer, primary_key=True, autoincrement=True)
	grado_id = Column(Integer, ForeignKey("grados.id"), nullable=False, index=True)
	codigo = Column(String(64), nullable=True)
	descripcion = Column(Text, nullable=False)
	categoria = Column(String(256), nullable=True)
	orden = Column(Integer, default=0, nullable=False)

	grado = relationship("Grado", back_populates="desempenos")


class SavedSession(Base):
	__tablename__ = "saved_sessions"
	# Single row per key; the assessment uses one fixed key
	key = Column(String(128), primary_key=True)
	payload = Column(Text, nullable=True)  # JSON string snapshot
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
