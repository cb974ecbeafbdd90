"""Application settings and configuration management."""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Portal credentials
    USERNAME: str = os.getenv("GRADEVUE_USERNAME", "")
    PASSWORD: str = os.getenv("GRADEVUE_PASSWORD", "")

    # StudentVUE web service
    ENDPOINT: str = os.getenv(
        "GRADEVUE_ENDPOINT",
        "https://student-portland.cascadetech.org/portland/Service/PXPCommunication.asmx",
    )
    SOAP_ACTION: str = "http://edupoint.com/webservices/ProcessWebServiceRequest"
    SERVICE_NAMESPACE: str = "http://edupoint.com/webservices/"
    WEB_SERVICE_HANDLE: str = "PXPWebServices"
    GRADEBOOK_METHOD: str = "Gradebook"

    # HTTP settings
    TIMEOUT_SECONDS: float = float(os.getenv("GRADEVUE_TIMEOUT_SECONDS", "30"))

    @property
    def has_credentials(self) -> bool:
        return bool(self.USERNAME and self.PASSWORD)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
