from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company_name: str | None = Field(default=None, alias="companyName")
    username: str | None = None
    password: str | None = None
    features: list[str] | None = None


class RegisterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    company_name: str = Field(alias="companyName")


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class CompanyProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    company_name: str = Field(alias="companyName")
    features: list[str] = []


class UserProfile(BaseModel):
    id: int
    username: str
    role: str


class FeaturesResponse(BaseModel):
    features: list[str]
