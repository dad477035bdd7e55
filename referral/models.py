"""Wire models for the referral backend endpoints."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class _Wire(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# --- POST /api/public/referral/validate ---


class ValidateRequest(_Wire):
    referral_code: str = Field(alias="referralCode")


class ValidateData(_Wire):
    valid: StrictBool = False


class ValidateResponse(_Wire):
    """Accepted iff success and data.valid are both true."""

    success: StrictBool = False
    data: ValidateData | None = None

    @property
    def accepted(self) -> bool:
        return self.success and self.data is not None and self.data.valid


# --- POST /api/public/referral/register-attribution ---


class AttributionRequest(_Wire):
    referral_code: str = Field(alias="referralCode")
    device_id: str | None = Field(default=None, alias="deviceId")


class AttributionData(_Wire):
    success: StrictBool = False


class AttributionResponse(_Wire):
    """Only the top-level success flag decides acceptance."""

    success: StrictBool = False
    data: AttributionData | None = None

    @property
    def accepted(self) -> bool:
        return self.success


# --- GET /api/referral/link ---


class ReferralLink(_Wire):
    """The authenticated user's shareable referral link."""

    referral_link: str = Field(alias="referralLink")
    message: str = ""
