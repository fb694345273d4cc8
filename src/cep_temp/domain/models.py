from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ViaCepAddress(BaseModel):
    model_config = ConfigDict(extra="ignore")

    cep: str = ""
    logradouro: str = ""
    complemento: str = ""
    bairro: str = ""
    localidade: str = ""
    uf: str = ""
    ibge: str = ""
    gia: str = ""
    ddd: str = ""
    siafi: str = ""
    erro: bool = False

    @field_validator(
        "cep",
        "logradouro",
        "complemento",
        "bairro",
        "localidade",
        "uf",
        "ibge",
        "gia",
        "ddd",
        "siafi",
        mode="before",
    )
    @classmethod
    def coerce_missing_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value


class PostalLookupResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    locality: str
    found: bool

    @classmethod
    def from_address(cls, address: ViaCepAddress) -> PostalLookupResult:
        locality = address.localidade.strip()
        return cls(locality=locality, found=not address.erro and bool(locality))


class WeatherApiLocation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    region: str = ""
    country: str = ""


class WeatherApiCurrent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Strict: numeric strings are rejected; ints still pass as floats.
    temp_c: float = Field(strict=True, allow_inf_nan=False)


class WeatherApiPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    location: WeatherApiLocation = Field(default_factory=WeatherApiLocation)
    current: WeatherApiCurrent


class WeatherResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature_celsius: float


class TemperatureResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    temp_C: float
    temp_F: float
    temp_K: float


class ErrorResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
