from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import httpx

from .schemas import DesempenoOut, GradoOut
from .settings import settings


logger = logging.getLogger(__name__)


class CatalogClient:
	"""Reads grades and desempeños from an upstream catalogue service."""

	def __init__(self, base_url: Optional[str] = None, *, timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
		self.base_url = (base_url or settings.catalog_base_url or "").rstrip("/")
		if not self.base_url:
			raise ValueError("CATALOG_BASE_URL is not configured")
		self._client = httpx.AsyncClient(
			base_url=self.base_url,
			timeout=timeout or settings.catalog_timeout,
			transport=transport,
		)

	async def _get_list(self, path: str) -> List[Dict[str, Any]]:
		r = await self._client.get(path)
		r.raise_for_status()
		data = r.json()
		if not isinstance(data, list):
			raise ValueError(f"Unexpected catalogue response for {path}: {r.text}")
		return data

	async def list_grados(self) -> List[GradoOut]:
		return [GradoOut.model_validate(item) for item in await self._get_list("/grados")]

	async def list_desempenos(self, grado_id: int) -> List[DesempenoOut]:
		items = await self._get_list(f"/grados/{grado_id}/desempenos")
		return [DesempenoOut.model_validate({"grado_id": grado_id, **item}) for item in items]

	async def aclose(self) -> None:
		await self._client.aclose()


class CatalogCache:
	"""Keeps the last good lists; a failed fetch leaves them unchanged."""

	def __init__(self) -> None:
		self.grados: List[GradoOut] = []
		self.desempenos: Dict[int, List[DesempenoOut]] = {}

	async def refresh_grados(self, client: CatalogClient) -> List[GradoOut]:
		try:
			self.grados = await client.list_grados()
		except (httpx.HTTPError, ValueError) as exc:
			logger.error("Could not load grados from %s: %s", client.base_url, exc)
		return self.grados

	async def refresh_desempenos(self, client: CatalogClient, grado_id: int) -> List[DesempenoOut]:
		try:
			self.desempenos[grado_id] = await client.list_desempenos(grado_id)
		except (httpx.HTTPError, ValueError) as exc:
			logger.error("Could not load desempenos for grado %s from %s: %s", grado_id, client.base_url, exc)
		return self.desempenos.get(grado_id, [])


catalog_cache = CatalogCache()
