from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="QUICKNOTE_", env_file=".env", extra="ignore")

    # Basic auth settings
    auth_username: str
    auth_password: str

    # Storage settings
    note_store_path: str = "data/vault.json"
    seed_demo_note: bool = True  # add the welcome note when the vault is empty

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()  # type: ignore
