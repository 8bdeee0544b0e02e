"""
Configuration settings for the gateway.
"""
from pydantic_settings import BaseSettings
from typing import Optional, List, Literal

DEFAULT_HTTP_CLIENT_TIMEOUT = 15.0
DEFAULT_SLOW_LOOKUP_MS = 3000


class Settings(BaseSettings):
    """Gateway settings loaded from environment variables."""

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # Options: "text", "json"
    LOG_INCLUDE_REQUEST_ID: bool = True  # Include X-Request-ID in logs

    # HTTP Client Configuration
    HTTP_CLIENT_TIMEOUT: float = DEFAULT_HTTP_CLIENT_TIMEOUT  # Applied to every registry, planner and forward call (seconds)
    HTTP_MAX_KEEPALIVE_CONNECTIONS: int = 10
    HTTP_MAX_CONNECTIONS: int = 20

    # Performance Monitoring
    RESPONSE_TIME_WARNING_THRESHOLD_MS: int = DEFAULT_SLOW_LOOKUP_MS  # Warn if a single lookup takes longer than 3s

    # Collaboration agent (center registry + path planner)
    COCO_AGENT_URL: Optional[str] = None  # e.g. http://coco-agent:8090
    PATH_PLANNER_URL: Optional[str] = None  # Defaults to COCO_AGENT_URL when unset

    # Routing headers and parameters
    DESTINATION_QUERY_PARAM: str = "destCenterCode"
    ROUTE_HEADER: str = "X-Route-Path"
    FORWARDED_FOR_HEADER: str = "X-Forwarded-For"

    # Behaviour when a request names no destination and carries no route
    ON_MISSING_DESTINATION: Literal["pass_through", "reject"] = "pass_through"

    # Paths served locally without any collaboration routing
    COLLABORATION_EXEMPT_PATHS: List[str] = ["/health"]

    # How non-terminal hops reach the next gateway
    FORWARD_MODE: Literal["proxy", "redirect"] = "proxy"
    FORWARD_SCHEME: str = "http"

    # Local service behind this gateway (terminal hop); unset = serve from this app
    LOCAL_SERVICE_URL: Optional[str] = None

    # Session login sidecar (disabled unless LOGIN_URL is set)
    LOGIN_URL: Optional[str] = None
    LOGIN_USER: str = ""
    LOGIN_PASSWORD: str = ""
    LOGIN_SESSION_COOKIE: str = "JSESSIONID"

    @property
    def planner_url(self) -> Optional[str]:
        """Base URL of the path planning service, falling back to the agent URL."""
        return self.PATH_PLANNER_URL or self.COCO_AGENT_URL

    @property
    def login_enabled(self) -> bool:
        return bool(self.LOGIN_URL)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
