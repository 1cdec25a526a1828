import logging
import re
from typing import Dict, Optional, Union
import requests
from pydantic import BaseModel, ConfigDict, Field
from quakeinsight.configs.settings import Settings
from quakeinsight.constants import FAST2SMS_URL, TWILIO_MESSAGES_URL
from quakeinsight.errors import BadRequest, SmsError

logging.basicConfig(level=logging.INFO)

INDIAN_MOBILE = re.compile(r"^[6-9]\d{9}$")

INVALID_NUMBER_MESSAGE = (
    "Please enter a valid Indian mobile number (10 digits starting with 6-9)"
)
SUCCESS_MESSAGE = "Alert registered! You will receive a confirmation SMS shortly."

FAST2SMS_ERRORS = {
    411: "Invalid API key. Please check your Fast2SMS API key.",
    412: "Insufficient balance. Please recharge your Fast2SMS account.",
    413: "Invalid mobile number format.",
}

TWILIO_ERRORS = {
    20003: "Invalid Twilio credentials. Please check your account SID and auth token.",
    21211: "Invalid mobile number format.",
    21608: "This number is not verified for the Twilio trial account.",
    21614: "This number cannot receive SMS messages.",
}


class SmsAlertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phone_number: str = Field(alias="phoneNumber")
    state: str
    min_magnitude: Union[float, str] = Field(alias="minMagnitude")


def clean_phone_number(phone_number: str) -> str:
    """Strips whitespace, hyphens and the +91 / 91 country code."""
    cleaned = re.sub(r"[\s-]", "", phone_number)
    if cleaned.startswith("+91"):
        cleaned = cleaned[3:]
    elif cleaned.startswith("91") and len(cleaned) == 12:
        cleaned = cleaned[2:]
    return cleaned


def is_valid_indian_number(phone_number: str) -> bool:
    return bool(INDIAN_MOBILE.match(clean_phone_number(phone_number)))


def format_magnitude(min_magnitude: Union[float, str]) -> str:
    # 4.0 -> "4", 4.5 -> "4.5"
    if isinstance(min_magnitude, float) and min_magnitude.is_integer():
        return str(int(min_magnitude))
    return str(min_magnitude)


def build_message(state: str, min_magnitude: Union[float, str]) -> str:
    return (
        f"QuakeInsight Alert Registered! You will receive SMS alerts for earthquakes "
        f"in {state} with magnitude {format_magnitude(min_magnitude)}+. Stay safe!"
    )


class SmsProvider:
    name = "base"

    def send(self, number: str, message: str) -> Optional[str]:
        """Sends one SMS to a cleaned 10-digit number, returns the provider request id."""
        raise NotImplementedError


class Fast2SmsProvider(SmsProvider):
    name = "fast2sms"

    def __init__(self, api_key: str, timeout: float = 30.0):
        self.api_key = api_key
        self.timeout = timeout

    def send(self, number: str, message: str) -> Optional[str]:
        logging.info(f"Sending SMS via Fast2SMS to {number}")
        try:
            response = requests.post(
                FAST2SMS_URL,
                headers={"authorization": self.api_key},
                json={
                    "route": "q",
                    "message": message,
                    "language": "english",
                    "flash": 0,
                    "numbers": number,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SmsError(f"SMS service request failed: {e}") from e

        logging.info(f"Fast2SMS response status: {response.status_code}")
        try:
            result = response.json()
        except ValueError:
            logging.error(f"Could not parse Fast2SMS response: {response.text}")
            raise SmsError("Invalid response from SMS service")

        if not result.get("return"):
            logging.error(f"Fast2SMS error: {result}")
            message = FAST2SMS_ERRORS.get(result.get("status_code"))
            if message is None:
                message = result.get("message") or "Failed to send SMS"
                if isinstance(message, list):
                    message = " ".join(str(m) for m in message)
            raise SmsError(message)

        return result.get("request_id")


class TwilioProvider(SmsProvider):
    name = "twilio"

    def __init__(
        self, account_sid: str, auth_token: str, from_number: str, timeout: float = 30.0
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout

    def send(self, number: str, message: str) -> Optional[str]:
        logging.info(f"Sending SMS via Twilio to +91{number}")
        try:
            response = requests.post(
                TWILIO_MESSAGES_URL.format(account_sid=self.account_sid),
                auth=(self.account_sid, self.auth_token),
                data={"To": f"+91{number}", "From": self.from_number, "Body": message},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SmsError(f"SMS service request failed: {e}") from e

        logging.info(f"Twilio response status: {response.status_code}")
        try:
            result = response.json()
        except ValueError:
            logging.error(f"Could not parse Twilio response: {response.text}")
            raise SmsError("Invalid response from SMS service")

        if not response.ok:
            logging.error(f"Twilio error: {result}")
            message = TWILIO_ERRORS.get(result.get("code")) or result.get(
                "message", "Failed to send SMS"
            )
            raise SmsError(message)

        return result.get("sid")


def get_provider(settings: Settings) -> SmsProvider:
    """Picks the configured SMS provider.

    With sms_provider "auto", Twilio wins when all of its credentials are
    set, otherwise Fast2SMS is used when its API key is set.
    """
    choice = settings.sms_provider
    use_twilio = choice == "twilio" or (choice == "auto" and settings.has_twilio)

    if use_twilio:
        if not settings.has_twilio:
            raise SmsError(
                "SMS service not configured. Please add TWILIO_ACCOUNT_SID, "
                "TWILIO_AUTH_TOKEN and TWILIO_PHONE_NUMBER."
            )
        return TwilioProvider(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            settings.twilio_phone_number,
        )

    if not settings.has_fast2sms:
        logging.error("Missing SMS provider credentials")
        raise SmsError("SMS service not configured. Please add FAST2SMS_API_KEY.")
    return Fast2SmsProvider(settings.fast2sms_api_key)


def send_sms_alert(request: SmsAlertRequest, settings: Settings) -> Dict:
    logging.info(
        f"SMS Alert Request - State: {request.state}, MinMag: {request.min_magnitude}"
    )

    number = clean_phone_number(request.phone_number)
    if not INDIAN_MOBILE.match(number):
        logging.error(f"Invalid phone number format: {number}")
        raise BadRequest(INVALID_NUMBER_MESSAGE)

    provider = get_provider(settings)
    request_id = provider.send(number, build_message(request.state, request.min_magnitude))
    logging.info(f"SMS sent successfully via {provider.name}! Request ID: {request_id}")

    return {"success": True, "message": SUCCESS_MESSAGE, "requestId": request_id}
