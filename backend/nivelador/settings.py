from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# Database (recreated by the desempeños loader on each deploy)
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Spreadsheet with the desempeños catalogue
	desempenos_file: str = Field(default="data/desempenos.xlsx", validation_alias="DESEMPENOS_FILE")
	# Sheet name; first sheet when unset
	desempenos_sheet: str | None = Field(default=None, validation_alias="DESEMPENOS_SHEET")

	# Optional upstream catalogue service; local DB is used when unset
	catalog_base_url: str | None = Field(default=None, validation_alias="CATALOG_BASE_URL")
	catalog_timeout: float = Field(default=10.0, validation_alias="CATALOG_TIMEOUT")

	# Comma separated list of allowed origins for the frontend
	cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

	# CSV download name is "<export_prefix>_<YYYY-MM-DD>.csv"
	export_prefix: str = Field(default="evaluacion_desempenos", validation_alias="EXPORT_PREFIX")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	@property
	def cors_origin_list(self) -> list[str]:
		return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

settings = Settings()
