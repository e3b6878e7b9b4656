from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..catalog_client import CatalogClient, catalog_cache
from ..db import get_db
from ..models import Desempeno, Grado
from ..schemas import DesempenoOut, GradoOut
from ..settings import settings


router = APIRouter(tags=["catalog"])


def _desempeno_out(row: Desempeno) -> DesempenoOut:
	return DesempenoOut(
		id=row.id,
		grado_id=row.grado_id,
		codigo=row.codigo,
		descripcion=row.descripcion,
		categoria=row.categoria,
	)


@router.get("/grados", response_model=List[GradoOut])
async def list_grados(db: Session = Depends(get_db)):
	if settings.catalog_base_url:
		client = CatalogClient()
		try:
			return await catalog_cache.refresh_grados(client)
		finally:
			await client.aclose()
	rows = db.query(Grado).order_by(Grado.orden, Grado.id).all()
	return [GradoOut(id=r.id, nombre=r.nombre) for r in rows]


@router.get("/grados/{grado_id}/desempenos", response_model=List[DesempenoOut])
async def list_desempenos(grado_id: int, db: Session = Depends(get_db)):
	if settings.catalog_base_url:
		client = CatalogClient()
		try:
			return await catalog_cache.refresh_desempenos(client, grado_id)
		finally:
			await client.aclose()
	grado = db.get(Grado, grado_id)
	if grado is None:
		raise HTTPException(status_code=404, detail="grado not found")
	return [_desempeno_out(r) for r in grado.desempenos]


@router.get("/desempenos/{desempeno_id}", response_model=DesempenoOut)
def get_desempeno(desempeno_id: int, db: Session = Depends(get_db)):
	row = db.get(Desempeno, desempeno_id)
	if row is None:
		raise HTTPException(status_code=404, detail="desempeno not found")
	return _desempeno_out(row)
