"""Pytest configuration and shared fixtures for the nivelador tests."""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Point the app at a throwaway SQLite file BEFORE importing nivelador
_TMP_DIR = tempfile.mkdtemp(prefix="nivelador-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_TMP_DIR) / 'test.db'}"

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from nivelador.db import Base, SessionLocal, engine  # noqa: E402
from nivelador.schemas import Level, Question, Session, Student  # noqa: E402


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def db():
    """Fresh schema for every test."""
    import nivelador.models  # noqa: F401  register tables

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient
    from nivelador.main import app

    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# Domain Fixtures
# ============================================================================


def make_level(key, claves):
    return Level(key=key, questions=[Question(descripcion=f"Pregunta {i + 1}", clave=c) for i, c in enumerate(claves)])


@pytest.fixture
def sample_session():
    """Two questions on every level except destacado, which has three."""
    return Session(
        competencia="Resuelve problemas de cantidad",
        niveles={
            "pre_inicio": make_level("pre_inicio", ["A", "B"]),
            "inicio": make_level("inicio", ["A", "B"]),
            "en_proceso": make_level("en_proceso", ["C", "D"]),
            "satisfactorio": make_level("satisfactorio", ["A", "A"]),
            "destacado": make_level("destacado", ["B", "C", "D"]),
        },
        estudiantes=[
            Student(nombre="Ana Quispe", respuestas={"inicio": ["A", "B"]}),
            Student(nombre="Luis Mamani", respuestas={
                "pre_inicio": ["A", "B"],
                "inicio": ["A", "B"],
                "en_proceso": ["C", "D"],
                "satisfactorio": ["A", "A"],
                "destacado": ["B", "C", "A"],
            }),
            Student(nombre="Rosa Huamán", respuestas={}),
        ],
    )
