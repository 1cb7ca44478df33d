"""Client settings loaded from environment variables."""

from enum import StrEnum

from pydantic import model_validator
from pydantic_settings import BaseSettings


class AzureEnvironment(StrEnum):
    """Supported Azure clouds."""

    AzureCloud = "AzureCloud"
    AzureChinaCloud = "AzureChinaCloud"
    AzureUSGovernment = "AzureUSGovernment"
    AzureGermanCloud = "AzureGermanCloud"


# (authority host, resource manager endpoint)
_ENDPOINTS: dict[AzureEnvironment, tuple[str, str]] = {
    AzureEnvironment.AzureCloud: (
        "https://login.microsoftonline.com",
        "https://management.azure.com",
    ),
    AzureEnvironment.AzureChinaCloud: (
        "https://login.chinacloudapi.cn",
        "https://management.chinacloudapi.cn",
    ),
    AzureEnvironment.AzureUSGovernment: (
        "https://login.microsoftonline.us",
        "https://management.usgovcloudapi.net",
    ),
    AzureEnvironment.AzureGermanCloud: (
        "https://login.microsoftonline.de",
        "https://management.microsoftazure.de",
    ),
}


class AzureSettings(BaseSettings):
    """Configuration for the ARM client.

    Values are read from ``AZURE_*`` environment variables (case-insensitive)
    and optionally from a ``.env`` file in the working directory.
    """

    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    subscription_id: str = ""
    resource_group_name: str = ""

    environment: AzureEnvironment = AzureEnvironment.AzureCloud
    use_default_credential: bool = False

    api_version: str = "2015-06-15"
    resource_group_api_version: str = "2016-06-01"

    max_retries: int = 3
    retry_interval: float = 5.0
    request_timeout: float = 60.0

    model_config = {
        "env_prefix": "AZURE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "frozen": True,
    }

    @model_validator(mode="after")
    def _validate_credentials(self) -> "AzureSettings":
        missing: list[str] = []
        if not self.subscription_id:
            missing.append("AZURE_SUBSCRIPTION_ID")
        if not self.use_default_credential:
            if not self.tenant_id:
                missing.append("AZURE_TENANT_ID")
            if not self.client_id:
                missing.append("AZURE_CLIENT_ID")
            if not self.client_secret:
                missing.append("AZURE_CLIENT_SECRET")
        if missing:
            raise ValueError(
                f"{', '.join(missing)} must be set. "
                "Set AZURE_USE_DEFAULT_CREDENTIAL=true to authenticate with a "
                "managed identity or the Azure CLI instead of a client secret."
            )
        if self.max_retries < 1:
            raise ValueError("AZURE_MAX_RETRIES must be at least 1")
        return self

    @property
    def authority_host(self) -> str:
        return _ENDPOINTS[self.environment][0]

    @property
    def resource_manager_endpoint(self) -> str:
        return _ENDPOINTS[self.environment][1]
