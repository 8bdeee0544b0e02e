"""
Pydantic models for the collaboration agent (center registry and path planner) responses.
"""
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CoCenterInfo(BaseModel):
    """Network endpoint of a collaboration center's gateway."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    code: str = Field(..., min_length=1, description="Collaboration center code")
    gateway_ip: str = Field(..., alias="gatewayIp", min_length=1, description="Gateway public host or IP")
    gateway_port: str = Field(..., alias="gatewayPort", description="Gateway port")

    @field_validator('gateway_port', mode='before')
    @classmethod
    def coerce_port(cls, v: Union[int, str]) -> str:
        """Accept ports encoded as JSON numbers or strings."""
        if isinstance(v, bool):
            raise ValueError("gatewayPort must be a number or string")
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator('gateway_port')
    @classmethod
    def validate_port(cls, v: str) -> str:
        """Port must be numeric once any leading ':' is removed."""
        port = v.lstrip(':')
        if not port.isdigit():
            raise ValueError(f"Invalid gatewayPort: {v!r}")
        return port

    @property
    def gateway_address(self) -> str:
        """host:port of the gateway."""
        return f"{self.gateway_ip}:{self.gateway_port}"

    def base_url(self, scheme: str = "http") -> str:
        """Absolute base URL of the gateway. Keeps an explicit scheme in gatewayIp."""
        if "://" in self.gateway_ip:
            return f"{self.gateway_ip}:{self.gateway_port}"
        return f"{scheme}://{self.gateway_address}"


class CoCenterInfoMessage(BaseModel):
    """Envelope returned by /co/center/local and /co/center/next."""

    status: int = Field(..., description="Agent status code")
    memo: Optional[str] = Field(None, description="Agent message")
    result: CoCenterInfo = Field(..., description="Center info")

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": 200,
                "memo": "success",
                "result": {"code": "CC-BJ", "gatewayIp": "10.0.0.12", "gatewayPort": "8080"}
            }
        }
    }


class OptimalPathMessage(BaseModel):
    """Envelope returned by /net/path/optimum."""

    status: int = Field(..., description="Agent status code")
    memo: Optional[str] = Field(None, description="Agent message")
    result: str = Field(..., description="Comma-delimited route of center codes")

    model_config = {
        "json_schema_extra": {
            "example": {"status": 200, "memo": "success", "result": "CC-BJ,CC-SH,CC-GZ"}
        }
    }
