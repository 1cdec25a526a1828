import os
from typing import Optional, Dict
from dotenv import load_dotenv
from pydantic import BaseModel, computed_field, field_validator
from quakeinsight.constants import DEFAULT_DB_PATH
from quakeinsight.utils.yaml import load_config_from_yaml

ENV_VARS = {
    "database_path": "DATABASE_PATH",
    "twilio_account_sid": "TWILIO_ACCOUNT_SID",
    "twilio_auth_token": "TWILIO_AUTH_TOKEN",
    "twilio_phone_number": "TWILIO_PHONE_NUMBER",
    "fast2sms_api_key": "FAST2SMS_API_KEY",
    "sms_provider": "SMS_PROVIDER",
    "mapbox_token": "MAPBOX_TOKEN",
    "usgs_timeout": "USGS_TIMEOUT",
    "log_level": "LOG_LEVEL",
}


class Settings(BaseModel):
    database_path: str = DEFAULT_DB_PATH
    twilio_account_sid: Optional[str] = None
    twilio_auth_token: Optional[str] = None
    twilio_phone_number: Optional[str] = None
    fast2sms_api_key: Optional[str] = None
    sms_provider: str = "auto"
    mapbox_token: Optional[str] = None
    usgs_timeout: float = 30.0
    log_level: str = "INFO"

    @field_validator("sms_provider")
    @classmethod
    def known_provider(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("auto", "twilio", "fast2sms"):
            raise ValueError(f"unknown SMS provider: {value}")
        return value

    @computed_field
    @property
    def has_twilio(self) -> bool:
        return bool(
            self.twilio_account_sid
            and self.twilio_auth_token
            and self.twilio_phone_number
        )

    @computed_field
    @property
    def has_fast2sms(self) -> bool:
        return bool(self.fast2sms_api_key)

    @staticmethod
    def from_env(environ: Dict[str, str] = None) -> "Settings":
        """Builds settings from environment variables.

        A .env file in the working directory is loaded first. When
        QUAKEINSIGHT_CONFIG points to a YAML file, its values are used as
        defaults and environment variables override them.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        data = {}
        config_path = environ.get("QUAKEINSIGHT_CONFIG")
        if config_path:
            data.update(load_config_from_yaml(config_path))

        for field, var in ENV_VARS.items():
            value = environ.get(var)
            if value:
                data[field] = value

        return Settings.model_validate(data)
